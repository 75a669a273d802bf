"""
Ticket field option model
"""

from sqlmodel import Field, SQLModel, Relationship
from sqlalchemy import DateTime
from datetime import datetime
from typing import Optional, TYPE_CHECKING
import uuid

from helpdesk_config.models.field_configuration import utc_now

if TYPE_CHECKING:
    from helpdesk_config.models.field_configuration import FieldConfiguration


class FieldOption(SQLModel, table=True):
    """One selectable value of a field configuration"""

    __tablename__ = "ticket_field_options"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    tenant_id: uuid.UUID = Field(
        index=True,
        description="Tenant ID for multi-tenant isolation"
    )
    customer_id: Optional[uuid.UUID] = Field(
        default=None,
        index=True,
        nullable=True,
        description="Owning customer; NULL means tenant-wide"
    )
    field_configuration_id: uuid.UUID = Field(
        foreign_key="ticket_field_configurations.id",
        index=True,
        description="Owning field configuration"
    )

    # Option details
    option_value: str = Field(max_length=100, nullable=False, description="Machine value")
    display_label: str = Field(max_length=255, nullable=False, description="Human text")
    color_hex: Optional[str] = Field(default=None, max_length=7, nullable=True, description="Hex color code for UI (e.g., #3b82f6)")
    icon_name: Optional[str] = Field(default=None, max_length=50, nullable=True, description="Icon name/identifier for UI")

    sort_order: int = Field(default=0)
    is_default: bool = Field(default=False, description="Pre-selected option")

    # Status
    is_active: bool = Field(default=True, index=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))

    # Relationships
    configuration: Optional["FieldConfiguration"] = Relationship(back_populates="options")
