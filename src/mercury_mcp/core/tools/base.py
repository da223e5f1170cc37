"""Shared types for tool implementations.

A :class:`ToolDefinition` is a context-agnostic template. It only becomes
invocable once :func:`bind` pairs it with a runtime context, producing a
:class:`BoundTool` that the registry can dispatch to.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Annotated, Any, Generic, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, ValidationError

from mercury_mcp.core.results import ToolResult

logger = logging.getLogger(__name__)


class ToolRegistryError(RuntimeError):
    """Base error for tool registry failures."""


class ToolAlreadyRegisteredError(ToolRegistryError):
    """Raised when attempting to register a tool with a duplicate name."""


class ToolNotFoundError(ToolRegistryError):
    """Raised when invoking an unknown tool."""


class ToolkitAlreadyRegisteredError(ToolRegistryError):
    """Raised when attempting to register a toolkit twice."""


class ToolInputError(ToolRegistryError):
    """Raised when tool arguments do not match the declared input schema."""

    def __init__(self, tool_name: str, problems: list[tuple[str, str]]) -> None:
        self.tool_name = tool_name
        self.problems = problems
        details = "; ".join(f"{name}: {reason}" for name, reason in problems)
        super().__init__(f"Invalid input for tool '{tool_name}': {details}")

    @property
    def fields(self) -> list[str]:
        return [name for name, _ in self.problems]

    @classmethod
    def from_validation_error(cls, tool_name: str, exc: ValidationError) -> ToolInputError:
        problems: list[tuple[str, str]] = []
        for error in exc.errors():
            location = ".".join(str(part) for part in error.get("loc", ())) or "<input>"
            problems.append((location, error.get("msg", "invalid value")))
        return cls(tool_name, problems)


class ToolInput(BaseModel):
    """Base class for declarative tool input schemas.

    Optional fields default to ``None`` so that an absent argument stays
    absent all the way to the request builder.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)


class EmptyInput(ToolInput):
    """Arguments for tools that take none."""


def _reject_bool(value: Any) -> Any:
    # bool subclasses int, so lax numeric parsing would turn ``true`` into 1.
    if isinstance(value, bool):
        raise ValueError("Input should be a number, not a boolean")
    return value


Count = Annotated[int, BeforeValidator(_reject_bool)]
Number = Annotated[float, BeforeValidator(_reject_bool)]


InputT = TypeVar("InputT", bound=ToolInput)
ContextT = TypeVar("ContextT")

ToolHandler = Callable[[InputT, ContextT], Awaitable[ToolResult]]


def validate_input(name: str, model: type[InputT], payload: Mapping[str, Any] | None) -> InputT:
    """Validate raw arguments against ``model`` or raise :class:`ToolInputError`."""

    if payload is not None and not isinstance(payload, Mapping):
        raise ToolInputError(name, [("<input>", "arguments must be an object")])
    try:
        return model.model_validate(dict(payload or {}))
    except ValidationError as exc:
        raise ToolInputError.from_validation_error(name, exc) from exc


@dataclass(frozen=True, slots=True)
class ToolDefinition(Generic[InputT, ContextT]):
    """Declarative description of a tool, not yet bound to a context."""

    name: str
    description: str
    input_model: type[InputT]
    handler: ToolHandler[InputT, ContextT] = field(repr=False)

    @property
    def input_schema(self) -> dict[str, Any]:
        return self.input_model.model_json_schema()


@dataclass(frozen=True, slots=True)
class BoundTool(Generic[InputT, ContextT]):
    """A tool definition paired with the context its handler will observe.

    Obtain instances through :func:`bind`; the constructor is not public API.
    """

    definition: ToolDefinition[InputT, ContextT]
    context: ContextT = field(repr=False)

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def description(self) -> str:
        return self.definition.description

    @property
    def input_schema(self) -> dict[str, Any]:
        return self.definition.input_schema

    def validate(self, payload: Mapping[str, Any] | None) -> InputT:
        return validate_input(self.name, self.definition.input_model, payload)

    async def __call__(self, arguments: InputT) -> ToolResult:
        try:
            return await self.definition.handler(arguments, self.context)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Tool '%s' failed unexpectedly", self.name)
            return ToolResult.failure(f"Tool '{self.name}' failed: {exc}", kind="internal")


def bind(definition: ToolDefinition[InputT, ContextT], context: ContextT) -> BoundTool[InputT, ContextT]:
    """Pair ``definition`` with ``context``; the only way to obtain an invocable tool."""

    return BoundTool(definition=definition, context=context)


@dataclass(frozen=True, slots=True)
class Toolkit(Generic[ContextT]):
    """Groups related tool definitions together."""

    name: str
    version: str
    description: str
    tools: tuple[ToolDefinition[Any, ContextT], ...]


__all__ = [
    "ContextT",
    "Count",
    "EmptyInput",
    "InputT",
    "Number",
    "ToolAlreadyRegisteredError",
    "ToolDefinition",
    "ToolHandler",
    "ToolInput",
    "ToolInputError",
    "ToolNotFoundError",
    "ToolRegistryError",
    "Toolkit",
    "ToolkitAlreadyRegisteredError",
    "bind",
    "validate_input",
]
