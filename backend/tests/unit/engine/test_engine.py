"""
Unit Tests for the Mock Request Pipeline
Tests for: end-to-end generation, error kinds, auth gate instrumentation
"""
import uuid
import pytest
from unittest.mock import AsyncMock, patch

from app.modules.mock_engine import template
from app.modules.mock_engine.engine import handle_mock_request
from app.modules.mock_engine.types import (
    EndpointDefinition,
    MockRequest,
    ProjectDefinition,
    ResponseType,
)


ITEMS_ENDPOINT = EndpointDefinition(
    id="ep-items",
    path="/items",
    method="GET",
    response_type=ResponseType.LIST,
    count=3,
    schema_definition={"id": "(random:uuid)", "label": "fixed"},
)

SECURE_ENDPOINT = EndpointDefinition(
    id="ep-secure",
    path="/secure",
    method="GET",
    count=5,
    require_auth=True,
    api_keys=["s3cret"],
    schema_definition={"id": "(random:uuid)"},
)

PROJECT = ProjectDefinition(id="p-1", name="Demo")


class TestHandleMockRequest:
    """Test serving requests end to end"""

    async def test_items_scenario(self):
        response = await handle_mock_request(MockRequest("GET", "/items"), PROJECT, [ITEMS_ENDPOINT])

        assert response.status_code == 200
        data = response.body["data"]
        assert len(data) == 3
        assert all(item["label"] == "fixed" for item in data)
        ids = [item["id"] for item in data]
        for value in ids:
            uuid.UUID(value)
        assert len(set(ids)) == 3

    async def test_no_matching_endpoint(self):
        response = await handle_mock_request(MockRequest("POST", "/items"), PROJECT, [ITEMS_ENDPOINT])

        assert response.status_code == 404
        assert response.body["error"] == "NoMatchingEndpoint"
        assert "POST /items" in response.body["message"]

    async def test_single_item_echoes_path_param(self):
        endpoint = EndpointDefinition(
            path="/items",
            method="GET",
            response_type=ResponseType.SINGLE,
            parameter_path=":id",
            schema_definition={"id": "(random:uuid)", "label": "fixed"},
        )

        response = await handle_mock_request(MockRequest("GET", "/items/42"), PROJECT, [endpoint])

        assert response.status_code == 200
        assert response.body == {"id": "42", "label": "fixed"}

    async def test_misconfigured_status(self):
        endpoint = EndpointDefinition(
            path="/items", method="GET", schema_definition={}, response_http_status="299"
        )

        response = await handle_mock_request(MockRequest("GET", "/items"), PROJECT, [endpoint])

        assert response.status_code == 500
        assert response.body["error"] == "MisconfiguredStatusCode"

    async def test_malformed_stored_schema(self):
        endpoint = EndpointDefinition(path="/items", method="GET", schema_definition='{"id": ')

        response = await handle_mock_request(MockRequest("GET", "/items"), PROJECT, [endpoint])

        assert response.status_code == 500
        assert response.body["error"] == "InvalidSchemaDefinition"

    async def test_deeply_nested_stored_schema(self):
        endpoint = EndpointDefinition(
            path="/items", method="GET", response_type=ResponseType.SINGLE,
            schema_definition="[" * 100000 + "]" * 100000,
        )

        response = await handle_mock_request(MockRequest("GET", "/items"), PROJECT, [endpoint])

        assert response.status_code == 500
        assert response.body["error"] == "InvalidSchemaDefinition"
        assert "nested too deeply" in response.body["message"]

    async def test_schema_stored_as_json_text(self):
        endpoint = EndpointDefinition(
            path="/items", method="GET", count=2, schema_definition='{"label": "fixed"}'
        )

        response = await handle_mock_request(MockRequest("GET", "/items"), PROJECT, [endpoint])

        assert response.body == {"data": [{"label": "fixed"}, {"label": "fixed"}]}

    async def test_delete_is_empty_and_skips_generation(self):
        endpoint = EndpointDefinition(
            path="/items", method="DELETE", response_type=ResponseType.SINGLE,
            schema_definition='{"broken": ',
        )

        with patch.object(template, "generate") as generate:
            response = await handle_mock_request(MockRequest("DELETE", "/items/1"), PROJECT, [endpoint])

        assert response.status_code == 200
        assert response.is_empty
        generate.assert_not_called()

    async def test_delay_is_applied(self):
        endpoint = EndpointDefinition(path="/slow", method="GET", schema_definition={}, delay=100)

        with patch("app.modules.mock_engine.dispatcher.asyncio.sleep", new_callable=AsyncMock) as sleep:
            await handle_mock_request(MockRequest("GET", "/slow"), PROJECT, [endpoint])

        sleep.assert_awaited_once_with(0.1)


class TestAuthGate:
    """Unauthorized requests never reach the template walker"""

    @pytest.mark.parametrize("headers", [{}, {"x-api-key": "wrong"}, {"x-api-key": ""}])
    async def test_rejected_without_generation(self, headers):
        with patch.object(template, "generate", wraps=template.generate) as generate, \
                patch.object(template, "generate_many", wraps=template.generate_many) as generate_many:
            response = await handle_mock_request(
                MockRequest("GET", "/secure", headers=headers), PROJECT, [SECURE_ENDPOINT]
            )

        assert response.status_code == 401
        assert response.body["error"] == "Unauthorized"
        assert generate.call_count == 0
        assert generate_many.call_count == 0

    async def test_rejected_before_delay(self):
        endpoint = EndpointDefinition(
            path="/secure", method="GET", schema_definition={},
            require_auth=True, api_keys=["k"], delay=1000,
        )

        with patch("app.modules.mock_engine.dispatcher.asyncio.sleep", new_callable=AsyncMock) as sleep:
            response = await handle_mock_request(MockRequest("GET", "/secure"), PROJECT, [endpoint])

        assert response.status_code == 401
        sleep.assert_not_called()

    async def test_valid_key_generates(self):
        with patch.object(template, "generate_many", wraps=template.generate_many) as generate_many:
            response = await handle_mock_request(
                MockRequest("GET", "/secure", headers={"X-Api-Key": "s3cret"}),
                PROJECT,
                [SECURE_ENDPOINT],
            )

        assert response.status_code == 200
        assert len(response.body["data"]) == 5
        assert generate_many.call_count == 1

    async def test_project_key_opens_endpoint(self):
        project = ProjectDefinition(id="p-1", api_keys=["project-key"])

        response = await handle_mock_request(
            MockRequest("GET", "/secure", headers={"x-api-key": "project-key"}),
            project,
            [SECURE_ENDPOINT],
        )

        assert response.status_code == 200
