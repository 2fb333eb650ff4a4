"""
Sum MCP Server - HTTP Application Entry Point

This module provides the FastAPI application for the HTTP transport. The
lifespan builds the frozen tool registry, the optional tool store and the
Dispatcher once per process and keeps them on ``app.state``.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sum_mcp.api.middleware.logging import RequestLoggingMiddleware
from sum_mcp.api.routes.health import router as health_router
from sum_mcp.api.routes.mcp import router as mcp_router
from sum_mcp.api.routes.tools import router as tools_router
from sum_mcp.core.config import Settings, get_settings
from sum_mcp.observability.logging import get_logger
from sum_mcp.observability.metrics import MetricsMiddleware, get_metrics_app
from sum_mcp.services.store import close_tool_store, create_tool_store
from sum_mcp.tools.dispatcher import build_dispatcher
from sum_mcp.tools.registry import build_default_registry
from sum_mcp.transports.jsonrpc import JsonRpcHandler

logger = get_logger(__name__)

APP_DESCRIPTION = "MCP tool server exposing the Sum Matrix tool catalog"


def get_cors_origins(settings: Settings) -> list[str]:
    """
    Get CORS allowed origins based on environment.

    - Development: Allow all origins (["*"])
    - Staging/Production: Use SUM_MCP_CORS_ORIGINS (comma-separated)
    - If not configured outside development: Empty list (blocks all
      cross-origin requests)

    Returns:
        List of allowed origin strings.
    """
    if settings.environment == "development":
        return ["*"]

    return [origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()]


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to use; defaults to get_settings().

    Returns:
        Configured FastAPI application.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        # =====================================================================
        # STARTUP
        # =====================================================================
        registry = build_default_registry()
        store = create_tool_store(settings)
        dispatcher = build_dispatcher(settings, registry, store=store)

        app.state.registry = registry
        app.state.store = store
        app.state.dispatcher = dispatcher
        app.state.jsonrpc_handler = JsonRpcHandler(registry, dispatcher, settings)

        logger.info(
            "http transport started",
            server=settings.service_name,
            version=settings.service_version,
            environment=settings.environment,
            tools=len(registry),
            auth_enabled=settings.auth_enabled,
        )

        yield

        # =====================================================================
        # SHUTDOWN
        # =====================================================================
        logger.info("http transport shutting down")
        close_tool_store(store)

    app = FastAPI(
        title=settings.service_name,
        description=APP_DESCRIPTION,
        version=settings.service_version,
        docs_url="/docs" if settings.environment != "production" else None,
        redoc_url="/redoc" if settings.environment != "production" else None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(settings),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(MetricsMiddleware)

    app.include_router(health_router)
    app.include_router(mcp_router)
    app.include_router(tools_router)
    app.mount("/metrics", get_metrics_app())

    return app


app = create_app()
