"""Core services for the Mercury MCP server."""

from .config import (
    DEFAULT_BASE_URL,
    ConfigurationError,
    MercurySettings,
    load_settings,
)
from .results import ToolResult
from .mercury import IdempotencyKeyProvider, MercuryContext, open_context
from .tool_registry import (
    ToolRegistry,
    ToolRegistryError,
    build_default_registry,
    build_tool_manifest,
)

__all__ = [
    "ConfigurationError",
    "DEFAULT_BASE_URL",
    "IdempotencyKeyProvider",
    "MercuryContext",
    "MercurySettings",
    "ToolRegistry",
    "ToolRegistryError",
    "ToolResult",
    "build_default_registry",
    "build_tool_manifest",
    "load_settings",
    "open_context",
]
