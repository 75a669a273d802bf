"""
Resolution scopes

A field is resolved by walking scopes from the most specific to the least
specific: customer, then tenant, then the built-in system catalog.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Union
import uuid


class ConfigSource(str, Enum):
    """Layer a resolved value came from"""
    CUSTOMER = "customer"
    TENANT = "tenant"
    SYSTEM = "system"
    NONE = "none"


@dataclass(frozen=True)
class CustomerScope:
    tenant_id: uuid.UUID
    customer_id: uuid.UUID

    @property
    def source(self) -> ConfigSource:
        return ConfigSource.CUSTOMER


@dataclass(frozen=True)
class TenantScope:
    tenant_id: uuid.UUID

    @property
    def customer_id(self) -> None:
        return None

    @property
    def source(self) -> ConfigSource:
        return ConfigSource.TENANT


@dataclass(frozen=True)
class SystemScope:

    @property
    def source(self) -> ConfigSource:
        return ConfigSource.SYSTEM


Scope = Union[CustomerScope, TenantScope, SystemScope]
StoreScope = Union[CustomerScope, TenantScope]


def scope_chain(tenant_id: uuid.UUID, customer_id: Optional[uuid.UUID] = None) -> List[Scope]:
    """Scopes to consult, in precedence order"""
    chain: List[Scope] = []
    if customer_id is not None:
        chain.append(CustomerScope(tenant_id=tenant_id, customer_id=customer_id))
    chain.append(TenantScope(tenant_id=tenant_id))
    chain.append(SystemScope())
    return chain
