"""Core shared kernel.

Foundational pieces used by every layer of the importer:
- Result types for railway-oriented programming
- Base error classes and error codes
- Settings and request validation helpers

The core package has NO dependencies on other application layers.
"""

from src.core.enums import ErrorCode
from src.core.errors import DomainError, ValidationError
from src.core.result import Failure, Result, Success

__all__ = [
    "DomainError",
    "ErrorCode",
    "Failure",
    "Result",
    "Success",
    "ValidationError",
]
