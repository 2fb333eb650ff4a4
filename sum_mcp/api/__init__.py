"""API Package - the HTTP transport's FastAPI routes, middleware, and dependencies.

Components:
- routes: API endpoint routers (health, mcp, tools)
- middleware: Request/response middleware (logging)
- deps: FastAPI dependency injection functions

Note: Import routers directly from sum_mcp.api.routes to avoid circular imports.
"""

__all__ = ["routes", "middleware", "deps"]
