"""
Tool Registry - static mapping from tool name to ToolDescriptor.

The registry is filled once at process start by an explicit builder
(see sum_mcp.tools.builtin.register_builtin_tools) and frozen afterwards.
Since nothing mutates it after startup, concurrent lookups need no lock.

Pattern: Service Registry (tool inventory)
Pattern: Singleton for global registry access
"""

import logging
from typing import Optional

from sum_mcp.core.exceptions import (
    DuplicateToolError,
    RegistryFrozenError,
    ToolNotFoundError,
)
from sum_mcp.models.domain import ToolDescriptor
from sum_mcp.models.tools import ToolCatalogEntry

logger = logging.getLogger(__name__)


# =============================================================================
# ToolRegistry Class
# =============================================================================


class ToolRegistry:
    """
    Registry of available tools.

    Tools are registered during startup; registering a name twice is a
    startup bug and fails loudly. Once ``freeze()`` is called the registry
    is read-only.

    Attributes:
        _tools: Dictionary mapping tool names to ToolDescriptor instances,
            in registration order.
        _frozen: Whether startup registration has completed.

    Example:
        >>> registry = ToolRegistry()
        >>> registry.register(add_descriptor)
        >>> registry.freeze()
        >>> registry.resolve("sum.math.add").description
        'Adds two numbers.'
    """

    def __init__(self) -> None:
        """Initialize an empty, mutable registry."""
        self._tools: dict[str, ToolDescriptor] = {}
        self._frozen = False

    # =========================================================================
    # Registration
    # =========================================================================

    def register(self, descriptor: ToolDescriptor) -> None:
        """
        Register a tool under its descriptor name.

        Args:
            descriptor: The ToolDescriptor to register.

        Raises:
            DuplicateToolError: If the name is already registered.
            RegistryFrozenError: If called after ``freeze()``.
        """
        if self._frozen:
            raise RegistryFrozenError(descriptor.name)
        if descriptor.name in self._tools:
            raise DuplicateToolError(descriptor.name)
        self._tools[descriptor.name] = descriptor
        logger.debug(f"Registered tool: {descriptor.name}")

    def freeze(self) -> None:
        """Mark startup registration as complete."""
        self._frozen = True
        logger.info(f"Tool registry frozen with {len(self._tools)} tools")

    @property
    def frozen(self) -> bool:
        return self._frozen

    # =========================================================================
    # Lookup
    # =========================================================================

    def resolve(self, name: str) -> ToolDescriptor:
        """
        Get a registered tool by name.

        Args:
            name: Exact tool name.

        Returns:
            The ToolDescriptor; the same instance on every call.

        Raises:
            ToolNotFoundError: If the tool is not registered.
        """
        try:
            return self._tools[name]
        except KeyError:
            raise ToolNotFoundError(name) from None

    def has(self, name: str) -> bool:
        """Check if a tool is registered."""
        return name in self._tools

    def list(self) -> list[ToolDescriptor]:
        """List all registered tools in registration order."""
        return list(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)

    # =========================================================================
    # Discovery
    # =========================================================================

    def catalog(self) -> "list[ToolCatalogEntry]":
        """
        Describe every registered tool for discovery.

        Discovery reads the registry directly and is not gated by auth or
        rate limiting.

        Returns:
            One ToolCatalogEntry per tool, in registration order.
        """
        return [
            ToolCatalogEntry(
                name=descriptor.name,
                description=descriptor.description,
                input_schema=descriptor.input_schema(),
            )
            for descriptor in self._tools.values()
        ]


# =============================================================================
# Singleton Access
# =============================================================================

_registry: Optional[ToolRegistry] = None


def build_default_registry() -> ToolRegistry:
    """
    Build and freeze a registry holding every built-in tool.

    Returns:
        A frozen ToolRegistry.
    """
    from sum_mcp.tools.builtin import register_builtin_tools

    registry = ToolRegistry()
    register_builtin_tools(registry)
    registry.freeze()
    return registry


def get_tool_registry() -> ToolRegistry:
    """
    Get the global tool registry instance.

    Built on first access and returned unchanged on every later call.

    Returns:
        The global, frozen ToolRegistry.
    """
    global _registry
    if _registry is None:
        _registry = build_default_registry()
    return _registry


def reset_tool_registry() -> None:
    """
    Reset the global tool registry.

    Primarily used for testing to ensure a clean state.
    """
    global _registry
    _registry = None
