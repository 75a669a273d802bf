"""
Field configuration API endpoints

Resolution endpoints report where each value came from (customer, tenant or
system) so admin screens can show what a customer inherits.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from typing import List
import structlog
import uuid

from helpdesk_config.core.dependencies import (
    get_aggregator,
    get_current_user_id,
    get_resolver,
    get_system_defaults,
    get_tenant_id,
    get_writer,
)
from helpdesk_config.schemas.field_configuration import (
    CustomerOverrideCreate,
    CustomerOverrideResponse,
    FieldConfigurationRead,
    FieldOptionRead,
    FieldResolution,
)
from helpdesk_config.services.configuration_aggregator import CompleteConfigurationAggregator
from helpdesk_config.services.configuration_writer import ConfigurationWriter
from helpdesk_config.services.exceptions import (
    ConfigurationNotFoundError,
    DuplicateOverrideError,
    InvalidOverridePayloadError,
)
from helpdesk_config.services.hierarchical_resolver import HierarchicalResolver, build_inheritance_summary
from helpdesk_config.services.system_defaults import SystemDefaultsProvider

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("/customers/{customer_id}/complete", response_model=List[FieldResolution])
async def get_customer_complete_configuration(
    customer_id: uuid.UUID,
    tenant_id: uuid.UUID = Depends(get_tenant_id),
    current_user_id: uuid.UUID = Depends(get_current_user_id),
    aggregator: CompleteConfigurationAggregator = Depends(get_aggregator)
):
    """Resolve every well-known field for a customer"""
    try:
        return await aggregator.get_customer_complete_configuration(tenant_id, customer_id)

    except Exception as e:
        logger.error(
            f"Error resolving complete configuration: {e}",
            tenant_id=str(tenant_id),
            customer_id=str(customer_id),
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to resolve customer configuration"
        )


@router.get("/customers/{customer_id}/fields/{field_name}", response_model=FieldResolution)
async def resolve_customer_field(
    customer_id: uuid.UUID,
    field_name: str,
    tenant_id: uuid.UUID = Depends(get_tenant_id),
    current_user_id: uuid.UUID = Depends(get_current_user_id),
    resolver: HierarchicalResolver = Depends(get_resolver)
):
    """Resolve one field for a customer"""
    try:
        return await resolver.resolve_field(tenant_id, customer_id, field_name)

    except Exception as e:
        logger.error(
            f"Error resolving field configuration: {e}",
            tenant_id=str(tenant_id),
            customer_id=str(customer_id),
            field_name=field_name,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to resolve field configuration"
        )


@router.get("/fields/{field_name}", response_model=FieldResolution)
async def resolve_tenant_field(
    field_name: str,
    tenant_id: uuid.UUID = Depends(get_tenant_id),
    current_user_id: uuid.UUID = Depends(get_current_user_id),
    resolver: HierarchicalResolver = Depends(get_resolver)
):
    """Resolve one field tenant-wide, skipping the customer layer"""
    try:
        return await resolver.resolve_field(tenant_id, None, field_name)

    except Exception as e:
        logger.error(
            f"Error resolving field configuration: {e}",
            tenant_id=str(tenant_id),
            field_name=field_name,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to resolve field configuration"
        )


@router.post(
    "/customers/{customer_id}/fields/{field_name}",
    response_model=CustomerOverrideResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_customer_field_configuration(
    customer_id: uuid.UUID,
    field_name: str,
    override_data: CustomerOverrideCreate,
    tenant_id: uuid.UUID = Depends(get_tenant_id),
    current_user_id: uuid.UUID = Depends(get_current_user_id),
    writer: ConfigurationWriter = Depends(get_writer)
):
    """Create a customer-specific configuration and its options"""
    try:
        result = await writer.create_customer_specific_configuration(
            tenant_id, customer_id, field_name, override_data
        )
        return CustomerOverrideResponse(
            field_configuration=FieldConfigurationRead.model_validate(result.field_configuration),
            field_options=[FieldOptionRead.model_validate(option) for option in result.field_options],
        )

    except InvalidOverridePayloadError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except DuplicateOverrideError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e)
        )
    except Exception as e:
        logger.error(
            f"Error creating customer field configuration: {e}",
            tenant_id=str(tenant_id),
            customer_id=str(customer_id),
            field_name=field_name,
            user_id=str(current_user_id),
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create customer field configuration"
        )


@router.get("/customers/{customer_id}/overrides", response_model=List[FieldConfigurationRead])
async def list_customer_overrides(
    customer_id: uuid.UUID,
    tenant_id: uuid.UUID = Depends(get_tenant_id),
    current_user_id: uuid.UUID = Depends(get_current_user_id),
    writer: ConfigurationWriter = Depends(get_writer)
):
    """List active customer-specific configurations"""
    try:
        configurations = await writer.list_customer_configurations(tenant_id, customer_id)
        return [FieldConfigurationRead.model_validate(c) for c in configurations]

    except Exception as e:
        logger.error(
            f"Error listing customer overrides: {e}",
            tenant_id=str(tenant_id),
            customer_id=str(customer_id),
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list customer overrides"
        )


@router.delete("/customers/{customer_id}/overrides/{configuration_id}")
async def deactivate_customer_override(
    customer_id: uuid.UUID,
    configuration_id: uuid.UUID,
    tenant_id: uuid.UUID = Depends(get_tenant_id),
    current_user_id: uuid.UUID = Depends(get_current_user_id),
    writer: ConfigurationWriter = Depends(get_writer)
):
    """Deactivate a customer override (soft delete - set is_active=False)"""
    try:
        await writer.deactivate_customer_configuration(tenant_id, customer_id, configuration_id)
        return {"message": "Customer override deactivated successfully"}

    except ConfigurationNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Customer override not found"
        )
    except Exception as e:
        logger.error(
            f"Error deactivating customer override: {e}",
            tenant_id=str(tenant_id),
            customer_id=str(customer_id),
            configuration_id=str(configuration_id),
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to deactivate customer override"
        )


@router.get("/system-defaults", response_model=List[FieldResolution])
async def list_system_defaults(
    tenant_id: uuid.UUID = Depends(get_tenant_id),
    current_user_id: uuid.UUID = Depends(get_current_user_id),
    defaults: SystemDefaultsProvider = Depends(get_system_defaults)
):
    """List the built-in fallback catalog"""
    entries = []
    for field_name in defaults.known_field_names():
        configuration = defaults.get_default_configuration(field_name)
        options = defaults.get_default_options(field_name)
        entries.append(FieldResolution(
            field_name=field_name,
            configuration=configuration,
            options=options,
            inheritance=build_inheritance_summary(configuration, options),
        ))
    return entries
