"""
Integration tests for the field configuration API
Tests the HTTP surface: tenant context, the four resolution/write operations
and error mapping
"""

import pytest
import pytest_asyncio
import uuid
from datetime import datetime, timedelta

from fastapi import status
from httpx import AsyncClient, ASGITransport
from jose import jwt

from helpdesk_config.core.auth import create_access_token
from helpdesk_config.core.config import get_settings
from helpdesk_config.core.dependencies import get_configuration_store
from helpdesk_config.main import app
from helpdesk_config.services.exceptions import StoreUnavailableError

BASE = "/api/v1/field-configurations"


class UnavailableStore:
    async def find_configuration(self, scope, field_name):
        raise StoreUnavailableError("connection refused", field_name=field_name)

    async def find_options(self, scope, field_name):
        raise StoreUnavailableError("connection refused", field_name=field_name)


# Fixtures
@pytest_asyncio.fixture
async def client(store):
    """HTTP client with the store bound to the test database"""
    app.dependency_overrides[get_configuration_store] = lambda: store
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(tenant_id):
    token = create_access_token(user_id=uuid.uuid4(), tenant_id=tenant_id)
    return {"Authorization": f"Bearer {token}"}


def override_payload(display_name="Prioridade VIP"):
    return {
        "display_name": display_name,
        "options": [
            {"value": "p1", "label": "P1", "color": "#dc2626"},
            {"value": "p2", "label": "P2", "is_default": True},
        ],
    }


# Tenant context
@pytest.mark.asyncio
async def test_missing_token_is_rejected(client, customer_id):
    response = await client.get(f"{BASE}/customers/{customer_id}/complete")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.asyncio
async def test_invalid_token_is_rejected(client, customer_id):
    response = await client.get(
        f"{BASE}/customers/{customer_id}/complete",
        headers={"Authorization": "Bearer not-a-jwt"},
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.asyncio
async def test_expired_token_is_rejected(client, tenant_id):
    token = create_access_token(uuid.uuid4(), tenant_id, expires_delta=timedelta(minutes=-5))
    response = await client.get(
        f"{BASE}/fields/priority",
        headers={"Authorization": f"Bearer {token}"},
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


# Resolution endpoints
@pytest.mark.asyncio
async def test_complete_configuration(client, auth_headers, customer_id):
    response = await client.get(f"{BASE}/customers/{customer_id}/complete", headers=auth_headers)

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [entry["field_name"] for entry in data] == [
        "priority", "status", "category", "urgency", "impact", "environment"
    ]
    assert data[0]["configuration"]["source"] == "system"
    assert data[0]["inheritance"] == {
        "config_source": "system",
        "options_source": "system",
        "has_customer_override": False,
        "has_customer_options": False,
    }
    assert data[2]["configuration"] is None
    assert data[2]["options"] == []
    assert data[2]["inheritance"]["config_source"] == "none"


@pytest.mark.asyncio
async def test_resolve_tenant_field(client, auth_headers, seed_field, tenant_id):
    await seed_field(tenant_id, "priority", "Urgência", options=[("normal", "Normal"), ("urgent", "Urgente")])

    response = await client.get(f"{BASE}/fields/priority", headers=auth_headers)

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["configuration"]["display_name"] == "Urgência"
    assert data["configuration"]["source"] == "tenant"
    assert [o["option_value"] for o in data["options"]] == ["normal", "urgent"]


@pytest.mark.asyncio
async def test_resolve_unknown_field(client, auth_headers, customer_id):
    response = await client.get(f"{BASE}/customers/{customer_id}/fields/nonexistent_field", headers=auth_headers)

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["configuration"] is None
    assert data["options"] == []
    assert data["inheritance"]["config_source"] == "none"
    assert data["inheritance"]["options_source"] == "none"


@pytest.mark.asyncio
async def test_create_then_resolve_customer_field(client, auth_headers, tenant_id, customer_id):
    response = await client.post(
        f"{BASE}/customers/{customer_id}/fields/priority",
        json=override_payload(),
        headers=auth_headers,
    )

    assert response.status_code == status.HTTP_201_CREATED
    created = response.json()
    assert created["field_configuration"]["tenant_id"] == str(tenant_id)
    assert created["field_configuration"]["customer_id"] == str(customer_id)
    assert [o["sort_order"] for o in created["field_options"]] == [1, 2]
    assert created["field_options"][1]["color_hex"] == "#3b82f6"

    response = await client.get(f"{BASE}/customers/{customer_id}/fields/priority", headers=auth_headers)
    data = response.json()
    assert data["configuration"]["source"] == "customer"
    assert data["inheritance"]["has_customer_override"] is True
    assert data["inheritance"]["has_customer_options"] is True

    # The tenant-wide view skips the customer layer
    response = await client.get(f"{BASE}/fields/priority", headers=auth_headers)
    assert response.json()["configuration"]["source"] == "system"


@pytest.mark.asyncio
async def test_overrides_are_tenant_scoped(client, auth_headers, customer_id):
    await client.post(
        f"{BASE}/customers/{customer_id}/fields/priority",
        json=override_payload(),
        headers=auth_headers,
    )
    other_tenant_token = create_access_token(uuid.uuid4(), uuid.uuid4())

    response = await client.get(
        f"{BASE}/customers/{customer_id}/fields/priority",
        headers={"Authorization": f"Bearer {other_tenant_token}"},
    )

    assert response.json()["configuration"]["source"] == "system"


# Override write errors
@pytest.mark.asyncio
async def test_create_with_empty_options(client, auth_headers, customer_id):
    response = await client.post(
        f"{BASE}/customers/{customer_id}/fields/priority",
        json={"display_name": "VIP", "options": []},
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.asyncio
async def test_create_without_display_name(client, auth_headers, customer_id):
    response = await client.post(
        f"{BASE}/customers/{customer_id}/fields/priority",
        json={"options": [{"value": "p1", "label": "P1"}]},
        headers=auth_headers,
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_create_with_oversized_color(client, auth_headers, customer_id):
    payload = override_payload()
    payload["options"][0]["color"] = "#ff0000ff"

    response = await client.post(
        f"{BASE}/customers/{customer_id}/fields/priority",
        json=payload,
        headers=auth_headers,
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_create_with_malformed_color(client, auth_headers, customer_id):
    payload = override_payload()
    payload["options"][0]["color"] = "#gggggg"

    response = await client.post(
        f"{BASE}/customers/{customer_id}/fields/priority",
        json=payload,
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.asyncio
async def test_create_with_overlong_field_name(client, auth_headers, customer_id):
    field_name = "f" * 101
    response = await client.post(
        f"{BASE}/customers/{customer_id}/fields/{field_name}",
        json=override_payload(),
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.asyncio
async def test_create_duplicate_conflicts(client, auth_headers, customer_id):
    url = f"{BASE}/customers/{customer_id}/fields/priority"
    first = await client.post(url, json=override_payload(), headers=auth_headers)
    second = await client.post(url, json=override_payload("Again"), headers=auth_headers)

    assert first.status_code == status.HTTP_201_CREATED
    assert second.status_code == status.HTTP_409_CONFLICT


# Override listing and deactivation
@pytest.mark.asyncio
async def test_list_and_deactivate_overrides(client, auth_headers, customer_id):
    created = await client.post(
        f"{BASE}/customers/{customer_id}/fields/status",
        json=override_payload("Estado"),
        headers=auth_headers,
    )
    configuration_id = created.json()["field_configuration"]["id"]

    listed = await client.get(f"{BASE}/customers/{customer_id}/overrides", headers=auth_headers)
    assert [c["id"] for c in listed.json()] == [configuration_id]

    deleted = await client.delete(
        f"{BASE}/customers/{customer_id}/overrides/{configuration_id}",
        headers=auth_headers,
    )
    assert deleted.status_code == status.HTTP_200_OK

    listed = await client.get(f"{BASE}/customers/{customer_id}/overrides", headers=auth_headers)
    assert listed.json() == []

    missing = await client.delete(
        f"{BASE}/customers/{customer_id}/overrides/{configuration_id}",
        headers=auth_headers,
    )
    assert missing.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_system_defaults_catalog(client, auth_headers):
    response = await client.get(f"{BASE}/system-defaults", headers=auth_headers)

    assert response.status_code == status.HTTP_200_OK
    data = {entry["field_name"]: entry for entry in response.json()}
    assert set(data) == {"priority", "status"}
    assert data["status"]["configuration"]["id"] == "system-status"


@pytest.mark.asyncio
async def test_system_defaults_require_a_user(client, tenant_id):
    settings = get_settings()
    token = jwt.encode(
        {
            "sub": "service-account",
            "tenant_id": str(tenant_id),
            "exp": datetime.utcnow() + timedelta(hours=1),
        },
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
    )

    response = await client.get(
        f"{BASE}/system-defaults",
        headers={"Authorization": f"Bearer {token}"},
    )

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


# Store failures
@pytest.mark.asyncio
async def test_store_failure_is_a_generic_error(client, auth_headers, customer_id):
    app.dependency_overrides[get_configuration_store] = lambda: UnavailableStore()

    response = await client.get(f"{BASE}/customers/{customer_id}/fields/priority", headers=auth_headers)

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json()["detail"] == "Failed to resolve field configuration"


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == "healthy"
