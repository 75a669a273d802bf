"""
Test configuration for pytest
"""

import os

# Test environment variables
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET_KEY"] = "test-jwt-secret"
os.environ["DEBUG"] = "false"
os.environ["ALLOW_DUPLICATE_OVERRIDES"] = "false"

import pytest
import pytest_asyncio
import uuid
from typing import Iterable, Optional, Tuple

from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from helpdesk_config.models import FieldConfiguration, FieldOption
from helpdesk_config.services import (
    CompleteConfigurationAggregator,
    ConfigurationStore,
    ConfigurationWriter,
    HierarchicalResolver,
    SystemDefaultsProvider,
)


@pytest_asyncio.fixture
async def engine(tmp_path):
    """File-backed SQLite so every session sees the same tables"""
    test_engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'field_config.db'}",
        echo=False,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield test_engine

    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def store(session_factory) -> ConfigurationStore:
    return ConfigurationStore(session_factory)


@pytest.fixture
def resolver(store) -> HierarchicalResolver:
    return HierarchicalResolver(store, SystemDefaultsProvider())


@pytest.fixture
def aggregator(resolver) -> CompleteConfigurationAggregator:
    return CompleteConfigurationAggregator(resolver)


@pytest.fixture
def writer(store) -> ConfigurationWriter:
    return ConfigurationWriter(store)


@pytest.fixture
def tenant_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture
def customer_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture
def other_customer_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture
def seed_field(store):
    """Insert a field configuration and its options directly"""

    async def _seed(
        tenant_id: uuid.UUID,
        field_name: str,
        display_name: str,
        customer_id: Optional[uuid.UUID] = None,
        options: Iterable[Tuple[str, str]] = (),
        is_active: bool = True,
    ) -> Tuple[FieldConfiguration, list]:
        configuration = FieldConfiguration(
            tenant_id=tenant_id,
            customer_id=customer_id,
            field_name=field_name,
            display_name=display_name,
            is_active=is_active,
        )
        option_rows = [
            FieldOption(
                tenant_id=tenant_id,
                customer_id=customer_id,
                field_configuration_id=configuration.id,
                option_value=value,
                display_label=label,
                sort_order=position,
            )
            for position, (value, label) in enumerate(options, start=1)
        ]
        return await store.add_configuration(configuration, option_rows)

    return _seed


@pytest.fixture
def seed_options(session_factory):
    """Attach option rows owned by a given scope to an existing configuration"""

    async def _seed(
        configuration: FieldConfiguration,
        customer_id: Optional[uuid.UUID],
        options: Iterable[Tuple[str, str, int]],
        is_active: bool = True,
    ) -> list:
        rows = [
            FieldOption(
                tenant_id=configuration.tenant_id,
                customer_id=customer_id,
                field_configuration_id=configuration.id,
                option_value=value,
                display_label=label,
                sort_order=sort_order,
                is_active=is_active,
            )
            for value, label, sort_order in options
        ]
        async with session_factory() as session:
            for row in rows:
                session.add(row)
            await session.commit()
        return rows

    return _seed
