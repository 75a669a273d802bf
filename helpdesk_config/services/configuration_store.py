"""
Persistent lookup of field configurations and options

Each call opens its own short-lived session from the factory, so one store
instance can serve concurrent resolutions.
"""

from contextlib import contextmanager
from typing import List, Optional, Sequence, Tuple
import uuid

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker
from sqlmodel import select
import structlog

from helpdesk_config.models.field_configuration import FieldConfiguration, utc_now
from helpdesk_config.models.field_option import FieldOption
from helpdesk_config.models.scope import CustomerScope, StoreScope
from helpdesk_config.services.exceptions import StoreUnavailableError

logger = structlog.get_logger(__name__)


def _customer_filter(column, scope: StoreScope):
    if isinstance(scope, CustomerScope):
        return column == scope.customer_id
    return column.is_(None)


@contextmanager
def _store_errors(action: str, tenant_id=None, customer_id=None, field_name=None):
    try:
        yield
    except (SQLAlchemyError, OSError) as e:
        raise StoreUnavailableError(
            f"Failed to {action}: {e}",
            tenant_id=tenant_id,
            customer_id=customer_id,
            field_name=field_name,
        ) from e


class ConfigurationStore:
    """Field configuration tables behind an async session factory"""

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    async def find_configuration(
        self,
        scope: StoreScope,
        field_name: str
    ) -> Optional[FieldConfiguration]:
        """Active configuration for field_name at exactly this scope"""
        query = (
            select(FieldConfiguration)
            .where(
                FieldConfiguration.tenant_id == scope.tenant_id,
                FieldConfiguration.field_name == field_name,
                FieldConfiguration.is_active == True,
                _customer_filter(FieldConfiguration.customer_id, scope),
            )
            # Newest row wins if duplicates slipped in
            .order_by(FieldConfiguration.created_at.desc(), FieldConfiguration.id.desc())
        )

        with _store_errors("load field configuration", scope.tenant_id, scope.customer_id, field_name):
            async with self.session_factory() as session:
                result = await session.exec(query)
                return result.first()

    async def find_options(self, scope: StoreScope, field_name: str) -> List[FieldOption]:
        """Active options for field_name owned by exactly this scope

        The parent configuration may belong to a broader scope of the same
        tenant, so a customer can carry its own option palette on top of a
        tenant-wide field definition. When several parents match, only the
        options of the most recently created one are returned.
        """
        query = (
            select(FieldOption)
            .join(FieldConfiguration, FieldOption.field_configuration_id == FieldConfiguration.id)
            .where(
                FieldOption.tenant_id == scope.tenant_id,
                FieldConfiguration.tenant_id == scope.tenant_id,
                FieldConfiguration.field_name == field_name,
                FieldConfiguration.is_active == True,
                FieldOption.is_active == True,
                _customer_filter(FieldOption.customer_id, scope),
            )
            .order_by(
                FieldConfiguration.created_at.desc(),
                FieldConfiguration.id.desc(),
                FieldOption.sort_order.asc(),
                FieldOption.created_at.asc(),
            )
        )

        with _store_errors("load field options", scope.tenant_id, scope.customer_id, field_name):
            async with self.session_factory() as session:
                result = await session.exec(query)
                options = list(result.all())

        if not options:
            return options
        newest_parent_id = options[0].field_configuration_id
        return [option for option in options if option.field_configuration_id == newest_parent_id]

    async def add_configuration(
        self,
        configuration: FieldConfiguration,
        options: Sequence[FieldOption] = ()
    ) -> Tuple[FieldConfiguration, List[FieldOption]]:
        """Insert a configuration and its options in one transaction"""
        with _store_errors(
            "create field configuration",
            configuration.tenant_id,
            configuration.customer_id,
            configuration.field_name,
        ):
            async with self.session_factory() as session:
                try:
                    session.add(configuration)
                    await session.flush()

                    for option in options:
                        option.field_configuration_id = configuration.id
                        session.add(option)

                    await session.commit()
                except SQLAlchemyError:
                    await session.rollback()
                    raise

                await session.refresh(configuration)
                for option in options:
                    await session.refresh(option)

        logger.info(
            f"Created field configuration {configuration.id}",
            field_name=configuration.field_name,
            option_count=len(options),
        )
        return configuration, list(options)

    async def list_customer_configurations(
        self,
        tenant_id: uuid.UUID,
        customer_id: uuid.UUID
    ) -> List[FieldConfiguration]:
        """Active customer-specific configurations, ordered for display"""
        query = (
            select(FieldConfiguration)
            .where(
                FieldConfiguration.tenant_id == tenant_id,
                FieldConfiguration.customer_id == customer_id,
                FieldConfiguration.is_active == True,
            )
            .order_by(FieldConfiguration.sort_order.asc(), FieldConfiguration.field_name.asc())
        )

        with _store_errors("list customer configurations", tenant_id, customer_id):
            async with self.session_factory() as session:
                result = await session.exec(query)
                return list(result.all())

    async def deactivate_configuration(
        self,
        tenant_id: uuid.UUID,
        customer_id: uuid.UUID,
        configuration_id: uuid.UUID
    ) -> Optional[FieldConfiguration]:
        """Soft delete a customer configuration and its options"""
        with _store_errors("deactivate field configuration", tenant_id, customer_id):
            async with self.session_factory() as session:
                result = await session.exec(
                    select(FieldConfiguration).where(
                        FieldConfiguration.id == configuration_id,
                        FieldConfiguration.tenant_id == tenant_id,
                        FieldConfiguration.customer_id == customer_id,
                        FieldConfiguration.is_active == True,
                    )
                )
                configuration = result.first()
                if configuration is None:
                    return None

                now = utc_now()
                options = await session.exec(
                    select(FieldOption).where(
                        FieldOption.field_configuration_id == configuration.id,
                        FieldOption.is_active == True,
                    )
                )
                for option in options.all():
                    option.is_active = False
                    option.updated_at = now
                    session.add(option)

                configuration.is_active = False
                configuration.updated_at = now
                session.add(configuration)

                try:
                    await session.commit()
                except SQLAlchemyError:
                    await session.rollback()
                    raise

                await session.refresh(configuration)

        logger.info(f"Deactivated field configuration {configuration_id}")
        return configuration
