"""
Schemas module
"""

from helpdesk_config.schemas.field_configuration import (
    CustomerOverrideCreate,
    CustomerOverrideResponse,
    FieldConfigurationRead,
    FieldOptionRead,
    FieldResolution,
    InheritanceSummary,
    OverrideOptionInput,
    ResolvedFieldConfiguration,
    ResolvedFieldOption,
)

__all__ = [
    "CustomerOverrideCreate",
    "CustomerOverrideResponse",
    "FieldConfigurationRead",
    "FieldOptionRead",
    "FieldResolution",
    "InheritanceSummary",
    "OverrideOptionInput",
    "ResolvedFieldConfiguration",
    "ResolvedFieldOption",
]
