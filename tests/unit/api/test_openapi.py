"""
OpenAPI document tests for the HTTP transport.
"""

from fastapi.testclient import TestClient


class TestOpenApi:
    def test_document_lists_public_paths(self, client: TestClient) -> None:
        schema = client.get("/openapi.json").json()

        assert schema["openapi"].startswith("3.")
        assert {"/", "/health/ready", "/mcp", "/v1/tools", "/v1/tools/execute"} <= set(schema["paths"])

    def test_execute_documents_request_body(self, client: TestClient) -> None:
        schema = client.get("/openapi.json").json()

        body = schema["paths"]["/v1/tools/execute"]["post"]["requestBody"]
        ref = body["content"]["application/json"]["schema"]["$ref"]
        assert ref.endswith("/ToolExecuteRequest")

    def test_tool_catalog_uses_wire_name(self, client: TestClient) -> None:
        schema = client.get("/openapi.json").json()

        assert "inputSchema" in schema["components"]["schemas"]["ToolCatalogEntry"]["properties"]
