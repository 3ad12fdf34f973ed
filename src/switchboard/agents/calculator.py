"""Calculator provider: basic arithmetic."""

from pydantic import BaseModel, Field

from switchboard.agents.provider import CapabilityProvider
from switchboard.tools.builder import build_tool


class AddArgs(BaseModel):
    """Add two numbers together"""

    a: float = Field(description="First number to add")
    b: float = Field(description="Second number to add")


class SubtractArgs(BaseModel):
    """Subtract the second number from the first number"""

    a: float = Field(description="Number to subtract from")
    b: float = Field(description="Number to subtract")


class MultiplyArgs(BaseModel):
    """Multiply two numbers together"""

    a: float = Field(description="First number to multiply")
    b: float = Field(description="Second number to multiply")


class DivideArgs(BaseModel):
    """Divide the first number by the second number"""

    a: float = Field(description="Number to divide")
    b: float = Field(description="Number to divide by")


def _divide(args: DivideArgs) -> float:
    if args.b == 0:
        raise ZeroDivisionError("Division by zero")
    return args.a / args.b


def build_calculator_provider() -> CapabilityProvider:
    """Create the Calculator provider."""
    return CapabilityProvider(
        name="Calculator",
        description="A mathematical agent that performs accurate and reliable calculations.",
        system_prompt=(
            "You are a highly accurate and fast calculator that will perform the "
            "calculations to the highest precision. All responses should be in "
            "plain text with no special formatting."
        ),
        tools=[
            build_tool("add", AddArgs, lambda args: args.a + args.b),
            build_tool("subtract", SubtractArgs, lambda args: args.a - args.b),
            build_tool("multiply", MultiplyArgs, lambda args: args.a * args.b),
            build_tool("divide", DivideArgs, _divide),
        ],
    )
