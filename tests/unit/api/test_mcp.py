"""
Tests for JSON-RPC over POST /mcp.
"""

from fastapi import status
from fastapi.testclient import TestClient


def _call(name: str, arguments=None, request_id=1) -> dict:
    params = {"name": name}
    if arguments is not None:
        params["arguments"] = arguments
    return {"jsonrpc": "2.0", "id": request_id, "method": "tools/call", "params": params}


class TestMcpEndpoint:
    def test_initialize(self, client: TestClient) -> None:
        response = client.post("/mcp", json={"jsonrpc": "2.0", "id": 1, "method": "initialize"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["result"]["serverInfo"]["name"] == "Sum.Mcp"

    def test_tools_list(self, client: TestClient) -> None:
        response = client.post("/mcp", json={"jsonrpc": "2.0", "id": 1, "method": "tools/list"})

        assert len(response.json()["result"]["tools"]) == 11

    def test_tools_call(self, client: TestClient) -> None:
        response = client.post("/mcp", json=_call("sum.math.avg", {"values": []}))

        result = response.json()["result"]
        assert result["isError"] is False
        assert result["structuredContent"] == {"count": 0, "average": None}

    def test_notification_is_202(self, client: TestClient) -> None:
        response = client.post(
            "/mcp", json={"jsonrpc": "2.0", "method": "notifications/initialized"}
        )

        assert response.status_code == status.HTTP_202_ACCEPTED
        assert response.content == b""

    def test_parse_error(self, client: TestClient) -> None:
        response = client.post(
            "/mcp", content=b"{nope", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["error"]["code"] == -32700

    def test_batch_is_rejected(self, client: TestClient) -> None:
        response = client.post("/mcp", json=[_call("sum.uuid.new")])

        assert response.json()["error"]["code"] == -32600

    def test_unknown_tool_is_invalid_params(self, client: TestClient) -> None:
        response = client.post("/mcp", json=_call("sum.nope"))

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["error"]["code"] == -32602

    def test_unauthorized_is_plain_401(self, secured_client: TestClient) -> None:
        response = secured_client.post(
            "/mcp", json=_call("sum.echo", {"text": "x"}), headers={"X-Api-Key": "xyz"}
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.text == "Unauthorized"

    def test_missing_key_is_401(self, secured_client: TestClient) -> None:
        response = secured_client.post("/mcp", json=_call("sum.echo", {"text": "x"}))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_protocol_methods_need_no_key(self, secured_client: TestClient) -> None:
        response = secured_client.post("/mcp", json={"jsonrpc": "2.0", "id": 1, "method": "ping"})

        assert response.status_code == status.HTTP_200_OK

    def test_rate_limited_is_429(self, client: TestClient) -> None:
        for i in range(10):
            client.post("/mcp", json=_call("sum.uuid.new", request_id=i))

        response = client.post("/mcp", json=_call("sum.uuid.new", request_id=10))

        assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
        assert int(response.headers["Retry-After"]) >= 1

    def test_partitions_follow_api_key(self, client: TestClient) -> None:
        for i in range(10):
            client.post("/mcp", json=_call("sum.uuid.new", request_id=i))

        response = client.post(
            "/mcp", json=_call("sum.uuid.new", request_id=10), headers={"X-Api-Key": "other"}
        )

        assert response.status_code == status.HTTP_200_OK
