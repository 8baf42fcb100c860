"""Result types for railway-oriented programming.

Statement imports report failures as values rather than exceptions. A parser
that cannot read a document returns ``Failure`` and the import handler turns
it into a request-level error; row-level problems never reach this type and
are collected as import issues instead.

Usage:
    from src.core.result import Failure, Result, Success

    def parse_amount(raw: str) -> Result[Decimal, str]:
        if not raw.strip():
            return Failure(error="Amount value is missing")
        return Success(value=Decimal(raw))

    match parse_amount("12.50"):
        case Success(value=amount):
            print(amount)
        case Failure(error=message):
            print(message)
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Successful outcome.

    Attributes:
        value: The produced value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Failed outcome.

    Attributes:
        error: The error describing why the operation failed.
    """

    error: E


type Result[T, E] = Success[T] | Failure[E]
