"""
Built-in system defaults

The last resolution layer. The catalog is a floor, not a complete schema:
fields outside it resolve to no configuration and no options.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from helpdesk_config.models.scope import ConfigSource
from helpdesk_config.schemas.field_configuration import (
    ResolvedFieldConfiguration,
    ResolvedFieldOption,
)


@dataclass(frozen=True)
class SystemOptionDefault:
    value: str
    label: str
    color: str
    is_default: bool = False


@dataclass(frozen=True)
class SystemFieldDefault:
    display_name: str
    options: Tuple[SystemOptionDefault, ...]
    field_type: str = "select"
    is_required: bool = True
    sort_order: int = 0


SYSTEM_DEFAULTS: Dict[str, SystemFieldDefault] = {
    "priority": SystemFieldDefault(
        display_name="Prioridade",
        sort_order=1,
        options=(
            SystemOptionDefault("low", "Baixa", "#10b981"),
            SystemOptionDefault("medium", "Média", "#f59e0b", is_default=True),
            SystemOptionDefault("high", "Alta", "#f97316"),
            SystemOptionDefault("critical", "Crítica", "#dc2626"),
        ),
    ),
    "status": SystemFieldDefault(
        display_name="Status",
        sort_order=2,
        options=(
            SystemOptionDefault("open", "Aberto", "#3b82f6", is_default=True),
            SystemOptionDefault("in_progress", "Em Progresso", "#8b5cf6"),
            SystemOptionDefault("resolved", "Resolvido", "#10b981"),
            SystemOptionDefault("closed", "Fechado", "#6b7280"),
        ),
    ),
}


class SystemDefaultsProvider:
    """Read-only access to the built-in field catalog"""

    def __init__(self, catalog: Optional[Dict[str, SystemFieldDefault]] = None):
        self._catalog = SYSTEM_DEFAULTS if catalog is None else catalog

    def known_field_names(self) -> List[str]:
        return list(self._catalog)

    def get_default_configuration(self, field_name: str) -> Optional[ResolvedFieldConfiguration]:
        """Return the built-in configuration for field_name, or None if it has none"""
        entry = self._catalog.get(field_name)
        if entry is None:
            return None

        return ResolvedFieldConfiguration(
            id=f"system-{field_name}",
            field_name=field_name,
            display_name=entry.display_name,
            field_type=entry.field_type,
            is_required=entry.is_required,
            is_system_field=True,
            sort_order=entry.sort_order,
            is_active=True,
            source=ConfigSource.SYSTEM,
        )

    def get_default_options(self, field_name: str) -> List[ResolvedFieldOption]:
        """Return the built-in options for field_name in display order"""
        entry = self._catalog.get(field_name)
        if entry is None:
            return []

        return [
            ResolvedFieldOption(
                id=f"system-{field_name}-{option.value}",
                field_configuration_id=f"system-{field_name}",
                option_value=option.value,
                display_label=option.label,
                color_hex=option.color,
                sort_order=position,
                is_default=option.is_default,
                is_active=True,
                source=ConfigSource.SYSTEM,
            )
            for position, option in enumerate(entry.options, start=1)
        ]
