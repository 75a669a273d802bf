from helpdesk_config.models.field_configuration import FieldConfiguration
from helpdesk_config.models.field_option import FieldOption
from helpdesk_config.models.scope import (
    ConfigSource,
    CustomerScope,
    Scope,
    SystemScope,
    TenantScope,
    scope_chain,
)
