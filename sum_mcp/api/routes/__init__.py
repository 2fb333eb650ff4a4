"""
API Routes Package

- health: liveness (GET /) and readiness (GET /health/ready)
- mcp: JSON-RPC endpoint (POST /mcp)
- tools: REST catalog and execution (/v1/tools)
"""

from sum_mcp.api.routes.health import router as health_router
from sum_mcp.api.routes.mcp import router as mcp_router
from sum_mcp.api.routes.tools import router as tools_router

__all__ = ["health_router", "mcp_router", "tools_router"]
