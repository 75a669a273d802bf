from helpdesk_config.services.configuration_aggregator import (
    WELL_KNOWN_FIELDS,
    CompleteConfigurationAggregator,
)
from helpdesk_config.services.configuration_store import ConfigurationStore
from helpdesk_config.services.configuration_writer import (
    ConfigurationWriter,
    CustomerOverrideResult,
)
from helpdesk_config.services.exceptions import (
    ConfigurationError,
    ConfigurationNotFoundError,
    DuplicateOverrideError,
    InvalidOverridePayloadError,
    StoreUnavailableError,
)
from helpdesk_config.services.hierarchical_resolver import (
    HierarchicalResolver,
    build_inheritance_summary,
)
from helpdesk_config.services.system_defaults import (
    SYSTEM_DEFAULTS,
    SystemDefaultsProvider,
)
