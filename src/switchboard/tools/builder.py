"""Tool descriptor construction.

A tool is declared as a pydantic model describing its arguments plus a
function (sync or async) implementing it. build_tool() turns the pair into a
ToolDescriptor: a transport-neutral advertisement for the oracle and a
validating invoke() wrapper that always returns a tagged result. Sync
implementations run in Starlette's threadpool so they never block the loop.

Example:
    >>> class AddArgs(BaseModel):
    ...     '''Add two numbers together'''
    ...     a: float = Field(description="First number to add")
    ...     b: float = Field(description="Second number to add")
    >>> add = build_tool("add", AddArgs, lambda args: args.a + args.b)
    >>> await add.invoke({"a": 2, "b": 2})
    Success(value=4, ok=True)
"""

import inspect
import json
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from pydantic import BaseModel, ValidationError
from starlette.concurrency import run_in_threadpool

from switchboard.errors import ErrorKind
from switchboard.tools.results import Failure, Success, ToolInvocationResult

logger = logging.getLogger(__name__)

ToolImplementation = Callable[[Any], Any | Awaitable[Any]]


def _format_validation_error(error: ValidationError) -> str:
    """Render pydantic's field-level errors as one readable line per field."""
    problems = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail.get("loc", ())) or "arguments"
        problems.append(f"{location}: {detail.get('msg', 'invalid value')}")
    return "; ".join(problems)


@dataclass(frozen=True)
class ToolDescriptor:
    """A named, schema-validated operation exposed to the oracle.

    Attributes:
        name: Tool name, unique across the assistant's registry
        description: What the tool does, shown to the oracle
        schema: Pydantic model describing the tool's arguments
        parameters: JSON schema rendered from `schema`
        implementation: Callable receiving a validated `schema` instance
    """

    name: str
    description: str
    schema: type[BaseModel]
    parameters: dict[str, Any]
    implementation: ToolImplementation

    def advertisement(self) -> dict[str, Any]:
        """Return the function-tool declaration sent to the oracle."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }

    def parse(self, payload: Any) -> BaseModel:
        """Validate a raw payload against the tool's schema.

        Args:
            payload: A mapping, a JSON object string, or None (no arguments)

        Returns:
            An instance of `schema`

        Raises:
            ValidationError: If the payload does not conform
        """
        if payload is None:
            payload = {}
        if isinstance(payload, (str, bytes)):
            return self.schema.model_validate_json(payload or "{}", strict=True)
        return self.schema.model_validate(payload, strict=True)

    async def invoke(self, payload: Any) -> ToolInvocationResult:
        """Parse the payload and run the implementation.

        Never raises: validation problems become INVALID_ARGUMENTS, errors
        raised by the implementation become TOOL_ERROR. Coroutine functions
        are awaited on the loop, anything else runs in a worker thread.
        """
        try:
            arguments = self.parse(payload)
        except ValidationError as e:
            message = _format_validation_error(e)
            logger.warning(f"Invalid arguments for tool '{self.name}': {message}")
            return Failure(kind=ErrorKind.INVALID_ARGUMENTS, message=message, cause=e)

        try:
            if inspect.iscoroutinefunction(self.implementation):
                value = await self.implementation(arguments)
            else:
                value = await run_in_threadpool(self.implementation, arguments)
                if inspect.isawaitable(value):
                    value = await value
        except Exception as e:
            logger.warning(f"Tool '{self.name}' failed: {e}")
            return Failure(
                kind=ErrorKind.TOOL_ERROR,
                message=str(e) or type(e).__name__,
                cause=e,
            )

        logger.debug(f"Tool '{self.name}' succeeded")
        return Success(value=value)


def build_tool(
    name: str,
    schema: type[BaseModel],
    implementation: ToolImplementation,
    description: str | None = None,
) -> ToolDescriptor:
    """Create a ToolDescriptor from a schema and an implementation.

    Args:
        name: Tool name advertised to the oracle
        schema: Pydantic model declaring the arguments. Field descriptions
                become parameter descriptions.
        implementation: Function or coroutine function taking a `schema`
                        instance and returning a JSON-serializable value
        description: What the tool does. Defaults to the schema's docstring.

    Returns:
        ToolDescriptor: The assembled tool

    Raises:
        ValueError: If the name is empty or no description is available
    """
    if not name:
        raise ValueError("Tool name must not be empty")

    # __doc__ is not inherited, so BaseModel's own docstring never leaks in
    if not description and schema.__doc__:
        description = inspect.cleandoc(schema.__doc__)
    if not description:
        raise ValueError(f"Tool '{name}' needs a description or a schema docstring")

    parameters = schema.model_json_schema()
    # The schema's own docstring is already advertised as the tool description
    parameters.pop("description", None)
    # Parameters must be plain JSON for the oracle transport
    json.dumps(parameters)

    return ToolDescriptor(
        name=name,
        description=description,
        schema=schema,
        parameters=parameters,
        implementation=implementation,
    )
