"""
Application factory tests.
"""

from fastapi import FastAPI
from fastapi.testclient import TestClient

from sum_mcp.core.config import Settings
from sum_mcp.main import create_app, get_cors_origins
from sum_mcp.tools.dispatcher import Dispatcher
from sum_mcp.tools.registry import ToolRegistry
from sum_mcp.transports.jsonrpc import JsonRpcHandler


class TestCreateApp:
    def test_metadata(self, test_settings: Settings) -> None:
        app = create_app(test_settings)

        assert isinstance(app, FastAPI)
        assert app.title == "Sum.Mcp"
        assert app.version == "1.0.0"

    def test_routes(self, test_settings: Settings) -> None:
        app = create_app(test_settings)
        api_paths = set(app.openapi()["paths"])
        mounts = {getattr(route, "path", None) for route in app.routes}

        assert {"/", "/health/ready", "/mcp", "/v1/tools", "/v1/tools/execute"} <= api_paths
        assert "/metrics" in mounts

    def test_docs_hidden_in_production(self, test_settings: Settings) -> None:
        settings = Settings(**{**test_settings.model_dump(), "environment": "production"})

        assert create_app(settings).docs_url is None

    def test_lifespan_populates_state(self, client: TestClient) -> None:
        state = client.app.state

        assert isinstance(state.registry, ToolRegistry)
        assert state.registry.frozen
        assert isinstance(state.dispatcher, Dispatcher)
        assert isinstance(state.jsonrpc_handler, JsonRpcHandler)
        assert state.store is None


class TestCorsOrigins:
    def test_development_allows_all(self, test_settings: Settings) -> None:
        assert get_cors_origins(test_settings) == ["*"]

    def test_production_uses_configured_list(self, test_settings: Settings) -> None:
        settings = Settings(
            **{
                **test_settings.model_dump(),
                "environment": "production",
                "cors_origins": "https://a.example, https://b.example,",
            }
        )

        assert get_cors_origins(settings) == ["https://a.example", "https://b.example"]

    def test_production_defaults_to_none(self, test_settings: Settings) -> None:
        settings = Settings(**{**test_settings.model_dump(), "environment": "staging"})

        assert get_cors_origins(settings) == []
