"""
Customer-specific field configuration writes
"""

from dataclasses import dataclass
from typing import List, Optional
import re
import uuid

import structlog

from helpdesk_config.core.config import get_settings
from helpdesk_config.models.field_configuration import FieldConfiguration
from helpdesk_config.models.field_option import FieldOption
from helpdesk_config.models.scope import CustomerScope
from helpdesk_config.schemas.field_configuration import CustomerOverrideCreate
from helpdesk_config.services.configuration_store import ConfigurationStore
from helpdesk_config.services.exceptions import (
    ConfigurationNotFoundError,
    DuplicateOverrideError,
    InvalidOverridePayloadError,
)

logger = structlog.get_logger(__name__)

HEX_COLOR_PATTERN = re.compile(r"^#[0-9a-fA-F]{6}$")

# Column widths of the field configuration tables
MAX_FIELD_NAME_LENGTH = 100
MAX_DISPLAY_NAME_LENGTH = 255
MAX_OPTION_VALUE_LENGTH = 100
MAX_OPTION_LABEL_LENGTH = 255
MAX_ICON_NAME_LENGTH = 50


@dataclass
class CustomerOverrideResult:
    field_configuration: FieldConfiguration
    field_options: List[FieldOption]


def validate_override_payload(field_name: str, payload: CustomerOverrideCreate) -> None:
    """Reject incomplete override payloads before anything is written"""
    if not field_name or not field_name.strip():
        raise InvalidOverridePayloadError("field_name is required")
    if len(field_name) > MAX_FIELD_NAME_LENGTH:
        raise InvalidOverridePayloadError(f"field_name exceeds {MAX_FIELD_NAME_LENGTH} characters")
    if not payload.display_name or not payload.display_name.strip():
        raise InvalidOverridePayloadError("display_name is required")
    if len(payload.display_name.strip()) > MAX_DISPLAY_NAME_LENGTH:
        raise InvalidOverridePayloadError(f"display_name exceeds {MAX_DISPLAY_NAME_LENGTH} characters")
    if not payload.options:
        raise InvalidOverridePayloadError("At least one option is required")

    for position, option in enumerate(payload.options, start=1):
        if not option.value or not option.value.strip():
            raise InvalidOverridePayloadError(f"Option {position} is missing a value")
        if not option.label or not option.label.strip():
            raise InvalidOverridePayloadError(f"Option {position} is missing a label")
        if len(option.value) > MAX_OPTION_VALUE_LENGTH or len(option.label) > MAX_OPTION_LABEL_LENGTH:
            raise InvalidOverridePayloadError(f"Option {position} value or label is too long")
        if option.color is not None and not HEX_COLOR_PATTERN.match(option.color):
            raise InvalidOverridePayloadError(f"Option {position} color must look like #rrggbb")
        if option.icon is not None and len(option.icon) > MAX_ICON_NAME_LENGTH:
            raise InvalidOverridePayloadError(f"Option {position} icon exceeds {MAX_ICON_NAME_LENGTH} characters")


class ConfigurationWriter:
    """Creates and retires customer-specific field overrides"""

    def __init__(
        self,
        store: ConfigurationStore,
        allow_duplicates: bool = False,
        default_color: Optional[str] = None
    ):
        self.store = store
        self.allow_duplicates = allow_duplicates
        self.default_color = default_color or get_settings().DEFAULT_OPTION_COLOR

    async def create_customer_specific_configuration(
        self,
        tenant_id: uuid.UUID,
        customer_id: uuid.UUID,
        field_name: str,
        payload: CustomerOverrideCreate
    ) -> CustomerOverrideResult:
        """
        Create a customer override for field_name with its option set.

        Options get a 1-based sort_order from their position in the payload.
        Unless duplicates are allowed, an existing active override for the
        same customer and field is rejected before writing.
        """
        validate_override_payload(field_name, payload)

        if not self.allow_duplicates:
            existing = await self.store.find_configuration(
                CustomerScope(tenant_id=tenant_id, customer_id=customer_id),
                field_name,
            )
            if existing is not None:
                raise DuplicateOverrideError(field_name, existing.id)

        configuration = FieldConfiguration(
            tenant_id=tenant_id,
            customer_id=customer_id,
            field_name=field_name,
            display_name=payload.display_name.strip(),
            field_type="select",
            is_required=True,
            is_system_field=False,
            is_active=True,
        )
        options = [
            FieldOption(
                tenant_id=tenant_id,
                customer_id=customer_id,
                field_configuration_id=configuration.id,
                option_value=option.value,
                display_label=option.label,
                color_hex=option.color or self.default_color,
                icon_name=option.icon,
                sort_order=position,
                is_default=option.is_default,
                is_active=True,
            )
            for position, option in enumerate(payload.options, start=1)
        ]

        configuration, options = await self.store.add_configuration(configuration, options)

        logger.info(
            f"Created customer override for field '{field_name}'",
            tenant_id=str(tenant_id),
            customer_id=str(customer_id),
            configuration_id=str(configuration.id),
        )
        return CustomerOverrideResult(field_configuration=configuration, field_options=options)

    async def list_customer_configurations(
        self,
        tenant_id: uuid.UUID,
        customer_id: uuid.UUID
    ) -> List[FieldConfiguration]:
        return await self.store.list_customer_configurations(tenant_id, customer_id)

    async def deactivate_customer_configuration(
        self,
        tenant_id: uuid.UUID,
        customer_id: uuid.UUID,
        configuration_id: uuid.UUID
    ) -> Optional[FieldConfiguration]:
        """Soft delete an override so resolution falls through to broader layers"""
        configuration = await self.store.deactivate_configuration(tenant_id, customer_id, configuration_id)
        if configuration is None:
            raise ConfigurationNotFoundError(f"Customer configuration {configuration_id} not found")

        logger.info(
            f"Deactivated customer override {configuration_id}",
            tenant_id=str(tenant_id),
            customer_id=str(customer_id),
        )
        return configuration
