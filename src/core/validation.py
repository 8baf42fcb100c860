"""Validation framework for import request checks.

This module provides utility functions for common validation patterns.
All validation functions return Result types for consistent error handling.

Usage:
    from src.core.validation import validate_timezone, validate_single_character
    from src.core.result import Success, Failure

    result = validate_timezone("America/Sao_Paulo")
    match result:
        case Success(value=zone):
            # zone is a ZoneInfo instance
            pass
        case Failure(error=error):
            # Handle validation error
            print(error.message)
"""

from collections.abc import Iterable, Sized
from decimal import ROUND_HALF_UP, Decimal
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from src.core.enums import ErrorCode
from src.core.errors import ValidationError
from src.core.result import Failure, Result, Success

_PERCENT_QUANTUM = Decimal("0.01")


def validate_not_empty(value: Any, field_name: str) -> Result[Any, ValidationError]:
    """Validate that a value is not empty.

    Args:
        value: Value to validate.
        field_name: Name of the field being validated.

    Returns:
        Success with value if not empty, Failure with ValidationError otherwise.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return Failure(
            error=ValidationError(
                code=ErrorCode.VALIDATION_FAILED,
                message=f"{field_name} cannot be empty",
                field=field_name,
            )
        )
    if isinstance(value, Sized) and not isinstance(value, str) and len(value) == 0:
        return Failure(
            error=ValidationError(
                code=ErrorCode.VALIDATION_FAILED,
                message=f"{field_name} cannot be empty",
                field=field_name,
            )
        )
    return Success(value=value)


def validate_timezone(name: str | None) -> Result[ZoneInfo, ValidationError]:
    """Validate an IANA time zone name.

    Args:
        name: Zone name such as "America/Sao_Paulo".

    Returns:
        Success with the ZoneInfo, Failure with ValidationError otherwise.
    """
    if not name or not name.strip():
        return Failure(
            error=ValidationError(
                code=ErrorCode.INVALID_TIMEZONE,
                message="Time zone cannot be empty",
                field="timezone",
            )
        )
    try:
        zone = ZoneInfo(name.strip())
    except (ZoneInfoNotFoundError, ValueError):
        return Failure(
            error=ValidationError(
                code=ErrorCode.INVALID_TIMEZONE,
                message=f"Unknown time zone: {name}",
                field="timezone",
            )
        )
    return Success(value=zone)


def validate_single_character(
    value: str | None, field_name: str, *, required: bool = False
) -> Result[str | None, ValidationError]:
    """Validate a separator/delimiter setting.

    Args:
        value: Candidate separator. ``None`` is accepted unless required.
        field_name: Name of the field being validated.
        required: Reject ``None`` when True.

    Returns:
        Success with value if valid, Failure with ValidationError otherwise.
    """
    if value is None and not required:
        return Success(value=None)
    if value is None or len(value) != 1:
        return Failure(
            error=ValidationError(
                code=ErrorCode.INVALID_SEPARATOR,
                message=f"{field_name} must be a single character",
                field=field_name,
            )
        )
    return Success(value=value)


def validate_max_items(
    items: Sized, max_items: int, field_name: str
) -> Result[Sized, ValidationError]:
    """Validate the length of a collection.

    Args:
        items: Collection to check.
        max_items: Maximum allowed number of items.
        field_name: Name of the field being validated.

    Returns:
        Success with items if valid, Failure with ValidationError otherwise.
    """
    if len(items) > max_items:
        return Failure(
            error=ValidationError(
                code=ErrorCode.VALIDATION_FAILED,
                message=f"{field_name} must have at most {max_items} items",
                field=field_name,
            )
        )
    return Success(value=items)


def validate_percentage_total(
    percentages: Iterable[Decimal],
    field_name: str,
    expected: Decimal = Decimal("100"),
) -> Result[Decimal, ValidationError]:
    """Validate that percentages add up to an exact total.

    Each percentage is rounded half-up to two places before summing. An
    empty iterable is accepted (nothing to allocate).

    Args:
        percentages: Percentages to add up.
        field_name: Name of the field being validated.
        expected: Required total.

    Returns:
        Success with the total, Failure with ValidationError otherwise.
    """
    values = [p.quantize(_PERCENT_QUANTUM, rounding=ROUND_HALF_UP) for p in percentages]
    if not values:
        return Success(value=Decimal("0"))

    total = sum(values, Decimal("0"))
    if total != expected:
        return Failure(
            error=ValidationError(
                code=ErrorCode.INVALID_RESPONSIBILITY_TOTAL,
                message=f"{field_name} must total {expected}%, got {total}%",
                field=field_name,
            )
        )
    return Success(value=total)
