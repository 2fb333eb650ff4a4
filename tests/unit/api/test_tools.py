"""
Tests for the REST tool endpoints.

- GET /v1/tools
- POST /v1/tools/execute
"""

from fastapi import status
from fastapi.testclient import TestClient

from sum_mcp.api.routes.tools import router as tools_router


class TestToolsRouter:
    def test_prefix_and_tags(self) -> None:
        assert tools_router.prefix == "/v1/tools"
        assert "Tools" in tools_router.tags


# =============================================================================
# GET /v1/tools
# =============================================================================


class TestListTools:
    def test_lists_catalog_in_registration_order(self, client: TestClient) -> None:
        response = client.get("/v1/tools")

        assert response.status_code == status.HTTP_200_OK
        names = [tool["name"] for tool in response.json()]
        assert names[:3] == ["sum.hello", "sum.echo", "sum.time.now"]
        assert len(names) == 11

    def test_entries_carry_input_schema(self, client: TestClient) -> None:
        tools = {tool["name"]: tool for tool in client.get("/v1/tools").json()}

        schema = tools["sum.math.add"]["inputSchema"]
        assert schema["type"] == "object"
        assert schema["required"] == ["a", "b"]
        assert schema["properties"]["a"]["type"] == "number"

    def test_discovery_needs_no_key(self, secured_client: TestClient) -> None:
        assert secured_client.get("/v1/tools").status_code == status.HTTP_200_OK


# =============================================================================
# POST /v1/tools/execute
# =============================================================================


class TestExecuteTool:
    def test_success(self, client: TestClient) -> None:
        response = client.post(
            "/v1/tools/execute", json={"name": "sum.math.add", "arguments": {"a": 3, "b": 2}}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "name": "sum.math.add",
            "success": True,
            "result": {"result": 5},
            "error": None,
            "error_kind": None,
            "error_reason": None,
        }

    def test_arguments_default_to_empty(self, client: TestClient) -> None:
        response = client.post("/v1/tools/execute", json={"name": "sum.hello"})

        assert response.json()["result"] == {"message": "Hello Sum Matrix!"}

    def test_tool_error_is_200(self, client: TestClient) -> None:
        response = client.post(
            "/v1/tools/execute", json={"name": "sum.time.parse", "arguments": {"input": "soon"}}
        )

        body = response.json()
        assert response.status_code == status.HTTP_200_OK
        assert body["success"] is False
        assert body["error_kind"] == "TOOL_ERROR"

    def test_unknown_tool_is_404(self, client: TestClient) -> None:
        response = client.post("/v1/tools/execute", json={"name": "sum.nope"})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error"] == "Tool not found: sum.nope"

    def test_invalid_arguments_is_422(self, client: TestClient) -> None:
        response = client.post(
            "/v1/tools/execute", json={"name": "sum.math.sum", "arguments": {"values": "1,2"}}
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["error_kind"] == "INVALID_ARGUMENTS"
        assert response.json()["error_reason"] == "TYPE_MISMATCH"

    def test_missing_name_is_rejected_by_validation(self, client: TestClient) -> None:
        response = client.post("/v1/tools/execute", json={"arguments": {}})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_wrong_key_is_401(self, secured_client: TestClient) -> None:
        response = secured_client.post(
            "/v1/tools/execute", json={"name": "sum.echo", "arguments": {"text": "x"}},
            headers={"X-Api-Key": "xyz"},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["error_kind"] == "UNAUTHORIZED"

    def test_right_key_is_accepted(self, secured_client: TestClient) -> None:
        response = secured_client.post(
            "/v1/tools/execute", json={"name": "sum.echo", "arguments": {"text": "x"}},
            headers={"X-Api-Key": "abc"},
        )

        assert response.status_code == status.HTTP_200_OK

    def test_rate_limited_is_429_with_retry_after(self, client: TestClient) -> None:
        for _ in range(10):
            client.post("/v1/tools/execute", json={"name": "sum.uuid.new"})

        response = client.post("/v1/tools/execute", json={"name": "sum.uuid.new"})

        assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
        assert int(response.headers["Retry-After"]) >= 1
        assert response.json()["error_kind"] == "RATE_LIMITED"
