"""Sum MCP Server - Source Package.

Note: Import `app` directly from `sum_mcp.main` to avoid circular imports.
"""

__version__ = "1.0.0"

__all__ = ["__version__", "api", "core", "models", "services", "tools", "transports"]
