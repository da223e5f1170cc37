"""Tool registry and dispatcher for bound Mercury tools."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol

from mercury_mcp.core.mercury import MercuryContext
from mercury_mcp.core.results import ToolResult
from mercury_mcp.core.tools import DEFAULT_TOOLKIT_FACTORIES
from mercury_mcp.core.tools.base import (
    BoundTool,
    ToolAlreadyRegisteredError,
    ToolDefinition,
    ToolInputError,
    Toolkit,
    ToolkitAlreadyRegisteredError,
    ToolNotFoundError,
    ToolRegistryError,
    bind,
)

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Stores bound tools keyed by unique name, in registration order."""

    def __init__(self, tools: Iterable[BoundTool[Any, Any]] | None = None) -> None:
        self._tools: dict[str, BoundTool[Any, Any]] = {}
        self._toolkits: dict[str, Toolkit[Any]] = {}
        for tool in tools or ():
            self.register(tool)

    def register(self, tool: BoundTool[Any, Any]) -> None:
        if tool.name in self._tools:
            raise ToolAlreadyRegisteredError(f"Tool '{tool.name}' already registered")
        self._tools[tool.name] = tool

    def add_toolkit(self, toolkit: Toolkit[Any], context: Any) -> None:
        """Bind every definition in ``toolkit`` to ``context`` and register it.

        Registration is all-or-nothing: on a name clash the tools added so
        far are removed again before the error propagates.
        """

        if toolkit.name in self._toolkits:
            raise ToolkitAlreadyRegisteredError(f"Toolkit '{toolkit.name}' already registered")

        registered: list[str] = []
        try:
            for definition in toolkit.tools:
                self.register(bind(definition, context))
                registered.append(definition.name)
        except ToolRegistryError:
            for name in registered:
                self._tools.pop(name, None)
            raise

        self._toolkits[toolkit.name] = toolkit

    def get(self, name: str) -> BoundTool[Any, Any]:
        try:
            return self._tools[name]
        except KeyError as exc:
            raise ToolNotFoundError(f"Unknown tool '{name}'") from exc

    def available_tools(self) -> dict[str, BoundTool[Any, Any]]:
        return dict(self._tools)

    def available_toolkits(self) -> dict[str, Toolkit[Any]]:
        return dict(self._toolkits)

    async def invoke(self, name: str, payload: Mapping[str, Any] | None = None) -> ToolResult:
        """Validate ``payload`` and run the named tool.

        Raises :class:`ToolNotFoundError` or :class:`ToolInputError` before
        any request is built; every other failure comes back as a result.
        """

        tool = self.get(name)
        arguments = tool.validate(payload)
        logger.debug("Invoking tool '%s'", name)
        return await tool(arguments)


class _Describable(Protocol):
    @property
    def name(self) -> str: ...

    @property
    def description(self) -> str: ...

    @property
    def input_schema(self) -> dict[str, Any]: ...


@dataclass(slots=True)
class ToolManifestEntry:
    name: str
    description: str
    input_schema: dict[str, Any]
    required: list[str]


def build_tool_manifest(tools: Iterable[_Describable]) -> list[ToolManifestEntry]:
    """Describe tools for the calling agent: name, description and input schema."""

    manifest: list[ToolManifestEntry] = []
    for tool in tools:
        schema = tool.input_schema
        required_fields = schema.get("required")
        required_list = list(required_fields) if isinstance(required_fields, list) else []
        manifest.append(
            ToolManifestEntry(
                name=tool.name,
                description=tool.description,
                input_schema=schema,
                required=required_list,
            )
        )
    return manifest


def default_definitions() -> list[ToolDefinition[Any, MercuryContext]]:
    """Return the unbound definitions of every built-in tool."""

    return [definition for factory in DEFAULT_TOOLKIT_FACTORIES for definition in factory().tools]


def build_default_registry(context: MercuryContext) -> ToolRegistry:
    """Return a registry with the built-in toolkits bound to ``context``."""

    registry = ToolRegistry()
    for factory in DEFAULT_TOOLKIT_FACTORIES:
        registry.add_toolkit(factory(), context)
    return registry


__all__ = [
    "ToolInputError",
    "ToolManifestEntry",
    "ToolNotFoundError",
    "ToolRegistry",
    "ToolRegistryError",
    "ToolAlreadyRegisteredError",
    "ToolkitAlreadyRegisteredError",
    "build_default_registry",
    "build_tool_manifest",
    "default_definitions",
]
