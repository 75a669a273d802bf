"""
Complete customer configuration report
"""

from typing import List
import asyncio
import uuid

import structlog

from helpdesk_config.schemas.field_configuration import FieldResolution
from helpdesk_config.services.hierarchical_resolver import HierarchicalResolver

logger = structlog.get_logger(__name__)

WELL_KNOWN_FIELDS = ("priority", "status", "category", "urgency", "impact", "environment")


class CompleteConfigurationAggregator:
    """Resolves every well-known ticket field for a customer"""

    def __init__(self, resolver: HierarchicalResolver, field_names=WELL_KNOWN_FIELDS):
        self.resolver = resolver
        self.field_names = tuple(field_names)

    async def get_customer_complete_configuration(
        self,
        tenant_id: uuid.UUID,
        customer_id: uuid.UUID
    ) -> List[FieldResolution]:
        """One entry per well-known field, in fixed field order.

        Fields are resolved concurrently; the first failure propagates.
        """
        results = await asyncio.gather(*(
            self.resolver.resolve_field(tenant_id, customer_id, field_name)
            for field_name in self.field_names
        ))

        overridden = [r.field_name for r in results if r.inheritance.has_customer_override]
        logger.debug(
            f"Resolved complete configuration for customer {customer_id}",
            tenant_id=str(tenant_id),
            customer_overrides=overridden,
        )
        return list(results)
