"""
Field configuration errors

A field with no configuration at any layer is not an error; resolution
returns None or an empty option list for it.
"""

from typing import Optional
import uuid


class ConfigurationError(Exception):
    """Base class for field configuration failures"""


class StoreUnavailableError(ConfigurationError):
    """The configuration store could not be reached or returned bad data"""

    def __init__(
        self,
        message: str,
        tenant_id: Optional[uuid.UUID] = None,
        customer_id: Optional[uuid.UUID] = None,
        field_name: Optional[str] = None,
    ):
        super().__init__(message)
        self.tenant_id = tenant_id
        self.customer_id = customer_id
        self.field_name = field_name


class InvalidOverridePayloadError(ConfigurationError):
    """Override payload rejected before any write"""


class DuplicateOverrideError(ConfigurationError):
    """An active customer override already exists for the field"""

    def __init__(self, field_name: str, existing_id: uuid.UUID):
        super().__init__(f"Customer override for '{field_name}' already exists ({existing_id})")
        self.field_name = field_name
        self.existing_id = existing_id


class ConfigurationNotFoundError(ConfigurationError):
    """No active configuration row matches the request"""
