"""
Authentication and service dependencies for FastAPI
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
import uuid
import structlog

from helpdesk_config.core.auth import extract_tenant_id, verify_token
from helpdesk_config.core.config import get_settings
from helpdesk_config.core.database import async_session_maker
from helpdesk_config.services.configuration_aggregator import CompleteConfigurationAggregator
from helpdesk_config.services.configuration_store import ConfigurationStore
from helpdesk_config.services.configuration_writer import ConfigurationWriter
from helpdesk_config.services.hierarchical_resolver import HierarchicalResolver
from helpdesk_config.services.system_defaults import SystemDefaultsProvider

logger = structlog.get_logger(__name__)
security = HTTPBearer(auto_error=False)


async def get_current_user_id(
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> uuid.UUID:
    """Get current user ID from JWT token"""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise credentials_exception

    user_id = verify_token(credentials.credentials)
    if user_id is None:
        raise credentials_exception

    logger.debug(f"User authenticated: {user_id}")
    return user_id


async def get_tenant_id(
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> uuid.UUID:
    """Get tenant ID from JWT token, rejecting callers without tenant context"""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    tenant_id = extract_tenant_id(credentials.credentials)
    if tenant_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Tenant context required",
        )

    return tenant_id


def get_configuration_store() -> ConfigurationStore:
    """Store bound to the application session factory"""
    return ConfigurationStore(async_session_maker)


def get_system_defaults() -> SystemDefaultsProvider:
    return SystemDefaultsProvider()


def get_resolver(
    store: ConfigurationStore = Depends(get_configuration_store),
    defaults: SystemDefaultsProvider = Depends(get_system_defaults),
) -> HierarchicalResolver:
    return HierarchicalResolver(store, defaults)


def get_aggregator(
    resolver: HierarchicalResolver = Depends(get_resolver),
) -> CompleteConfigurationAggregator:
    return CompleteConfigurationAggregator(resolver)


def get_writer(
    store: ConfigurationStore = Depends(get_configuration_store),
) -> ConfigurationWriter:
    settings = get_settings()
    return ConfigurationWriter(
        store,
        allow_duplicates=settings.ALLOW_DUPLICATE_OVERRIDES,
        default_color=settings.DEFAULT_OPTION_COLOR,
    )
