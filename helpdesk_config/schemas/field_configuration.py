"""
Schemas for resolved field configurations, options and override payloads
"""

from sqlmodel import Field, SQLModel
from datetime import datetime
from typing import List, Optional
import uuid

from helpdesk_config.models.field_configuration import FieldConfiguration
from helpdesk_config.models.field_option import FieldOption
from helpdesk_config.models.scope import ConfigSource


# ============================================================================
# Resolution results
# ============================================================================

class ResolvedFieldConfiguration(SQLModel):
    """Field configuration tagged with the layer it was resolved from"""
    id: str
    tenant_id: Optional[uuid.UUID] = None
    customer_id: Optional[uuid.UUID] = None
    field_name: str
    display_name: str
    field_type: str = "select"
    is_required: bool = False
    is_system_field: bool = False
    sort_order: int = 0
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    source: ConfigSource

    @classmethod
    def from_record(cls, record: FieldConfiguration, source: ConfigSource) -> "ResolvedFieldConfiguration":
        return cls(
            id=str(record.id),
            tenant_id=record.tenant_id,
            customer_id=record.customer_id,
            field_name=record.field_name,
            display_name=record.display_name,
            field_type=record.field_type,
            is_required=record.is_required,
            is_system_field=record.is_system_field,
            sort_order=record.sort_order,
            is_active=record.is_active,
            created_at=record.created_at,
            updated_at=record.updated_at,
            source=source,
        )


class ResolvedFieldOption(SQLModel):
    """Field option tagged with the layer it was resolved from"""
    id: str
    tenant_id: Optional[uuid.UUID] = None
    customer_id: Optional[uuid.UUID] = None
    field_configuration_id: Optional[str] = None
    option_value: str
    display_label: str
    color_hex: Optional[str] = None
    icon_name: Optional[str] = None
    sort_order: int = 0
    is_default: bool = False
    is_active: bool = True
    source: ConfigSource

    @classmethod
    def from_record(cls, record: FieldOption, source: ConfigSource) -> "ResolvedFieldOption":
        return cls(
            id=str(record.id),
            tenant_id=record.tenant_id,
            customer_id=record.customer_id,
            field_configuration_id=str(record.field_configuration_id),
            option_value=record.option_value,
            display_label=record.display_label,
            color_hex=record.color_hex,
            icon_name=record.icon_name,
            sort_order=record.sort_order,
            is_default=record.is_default,
            is_active=record.is_active,
            source=source,
        )


class InheritanceSummary(SQLModel):
    """Which layer won for the configuration and for the options"""
    config_source: ConfigSource
    options_source: ConfigSource
    has_customer_override: bool
    has_customer_options: bool


class FieldResolution(SQLModel):
    """Resolved configuration, options and inheritance for one field"""
    field_name: str
    configuration: Optional[ResolvedFieldConfiguration] = None
    options: List[ResolvedFieldOption] = []
    inheritance: InheritanceSummary


# ============================================================================
# Customer override payloads
# ============================================================================

class OverrideOptionInput(SQLModel):
    value: str = Field(..., max_length=100)
    label: str = Field(..., max_length=255)
    color: Optional[str] = Field(default=None, max_length=7)
    icon: Optional[str] = Field(default=None, max_length=50)
    is_default: bool = False


class CustomerOverrideCreate(SQLModel):
    """Schema for creating a customer-specific field configuration"""
    display_name: str = Field(..., max_length=255)
    options: List[OverrideOptionInput]


class FieldConfigurationRead(SQLModel):
    id: uuid.UUID
    tenant_id: uuid.UUID
    customer_id: Optional[uuid.UUID] = None
    field_name: str
    display_name: str
    field_type: str
    is_required: bool
    is_system_field: bool
    sort_order: int
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class FieldOptionRead(SQLModel):
    id: uuid.UUID
    tenant_id: uuid.UUID
    customer_id: Optional[uuid.UUID] = None
    field_configuration_id: uuid.UUID
    option_value: str
    display_label: str
    color_hex: Optional[str] = None
    icon_name: Optional[str] = None
    sort_order: int
    is_default: bool
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True


class CustomerOverrideResponse(SQLModel):
    """Created customer override with its options"""
    field_configuration: FieldConfigurationRead
    field_options: List[FieldOptionRead]
