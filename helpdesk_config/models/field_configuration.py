"""
Ticket field configuration model

A configuration row describes one logical ticket field (priority, status, ...)
for a tenant. A NULL customer_id marks the tenant-wide row; a non-NULL
customer_id marks a customer-specific override.
"""

from sqlmodel import Field, SQLModel, Relationship
from sqlalchemy import DateTime, Index
from datetime import datetime, timezone
from typing import Optional, TYPE_CHECKING
import uuid

if TYPE_CHECKING:
    from helpdesk_config.models.field_option import FieldOption


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class FieldConfiguration(SQLModel, table=True):
    """Field configuration scoped to a tenant and optionally a customer"""

    __tablename__ = "ticket_field_configurations"
    __table_args__ = (
        Index(
            "idx_field_config_scope",
            "tenant_id", "customer_id", "field_name", "is_active",
        ),
    )

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

    # Field details
    field_name: str = Field(max_length=100, index=True, nullable=False, description="Logical field key, e.g. priority")
    display_name: str = Field(max_length=255, nullable=False, description="Human label")
    field_type: str = Field(default="select", max_length=50, description="Semantic type tag")

    is_required: bool = Field(default=False)
    is_system_field: bool = Field(default=False)

    # Display order
    sort_order: int = Field(default=0, description="Presentation order only")

    # Status
    is_active: bool = Field(default=True, index=True, description="Soft-delete flag")

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))

    # Relationships
    options: list["FieldOption"] = Relationship(back_populates="configuration")
