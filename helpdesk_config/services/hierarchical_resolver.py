"""
Hierarchical field resolution

Resolves the effective configuration and the effective option set of a
ticket field by walking the scopes customer -> tenant -> system and stopping
at the first layer that has data. The two walks are independent: a customer
may override only the option palette of a field while the field definition
itself still comes from the tenant or the system catalog, or the other way
round.

Store failures propagate to the caller. They are never turned into system
defaults, since an unreachable store is not the same as a missing override.
"""

from typing import List, Optional
import asyncio
import uuid

import structlog

from helpdesk_config.models.scope import ConfigSource, SystemScope, scope_chain
from helpdesk_config.schemas.field_configuration import (
    FieldResolution,
    InheritanceSummary,
    ResolvedFieldConfiguration,
    ResolvedFieldOption,
)
from helpdesk_config.services.configuration_store import ConfigurationStore
from helpdesk_config.services.system_defaults import SystemDefaultsProvider

logger = structlog.get_logger(__name__)


def build_inheritance_summary(
    configuration: Optional[ResolvedFieldConfiguration],
    options: List[ResolvedFieldOption]
) -> InheritanceSummary:
    """Summarize which layer won for the configuration and for the options"""
    config_source = configuration.source if configuration else ConfigSource.NONE
    options_source = options[0].source if options else ConfigSource.NONE
    return InheritanceSummary(
        config_source=config_source,
        options_source=options_source,
        has_customer_override=config_source == ConfigSource.CUSTOMER,
        has_customer_options=options_source == ConfigSource.CUSTOMER,
    )


class HierarchicalResolver:
    """Resolves field configurations and options across the three layers"""

    def __init__(self, store: ConfigurationStore, defaults: Optional[SystemDefaultsProvider] = None):
        self.store = store
        self.defaults = defaults or SystemDefaultsProvider()

    async def resolve_field_configuration(
        self,
        tenant_id: uuid.UUID,
        customer_id: Optional[uuid.UUID],
        field_name: str
    ) -> Optional[ResolvedFieldConfiguration]:
        """
        Return the most specific active configuration for field_name.

        Returns None when no layer, including the system catalog, defines
        the field.
        """
        for scope in scope_chain(tenant_id, customer_id):
            if isinstance(scope, SystemScope):
                configuration = self.defaults.get_default_configuration(field_name)
                if configuration is not None:
                    logger.debug(f"Field '{field_name}' configuration resolved from system defaults")
                return configuration

            record = await self.store.find_configuration(scope, field_name)
            if record is not None:
                logger.debug(
                    f"Field '{field_name}' configuration resolved from {scope.source.value}",
                    tenant_id=str(tenant_id),
                    customer_id=str(customer_id) if customer_id else None,
                )
                return ResolvedFieldConfiguration.from_record(record, scope.source)

        return None

    async def resolve_field_options(
        self,
        tenant_id: uuid.UUID,
        customer_id: Optional[uuid.UUID],
        field_name: str
    ) -> List[ResolvedFieldOption]:
        """
        Return the option set of the most specific layer that has any options.

        Options are ordered by sort_order; an empty list means no layer
        defines options for the field.
        """
        for scope in scope_chain(tenant_id, customer_id):
            if isinstance(scope, SystemScope):
                return self.defaults.get_default_options(field_name)

            records = await self.store.find_options(scope, field_name)
            if records:
                logger.debug(
                    f"Field '{field_name}' options resolved from {scope.source.value}",
                    tenant_id=str(tenant_id),
                    customer_id=str(customer_id) if customer_id else None,
                    option_count=len(records),
                )
                options = [ResolvedFieldOption.from_record(record, scope.source) for record in records]
                # Stable sort keeps store order for equal sort_order values
                return sorted(options, key=lambda option: option.sort_order)

        return []

    async def resolve_field(
        self,
        tenant_id: uuid.UUID,
        customer_id: Optional[uuid.UUID],
        field_name: str
    ) -> FieldResolution:
        """Resolve configuration and options of one field with its inheritance summary"""
        configuration, options = await asyncio.gather(
            self.resolve_field_configuration(tenant_id, customer_id, field_name),
            self.resolve_field_options(tenant_id, customer_id, field_name),
        )
        return FieldResolution(
            field_name=field_name,
            configuration=configuration,
            options=options,
            inheritance=build_inheritance_summary(configuration, options),
        )
