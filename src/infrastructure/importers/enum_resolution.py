"""Enum resolution strategies for statement fields.

Two deliberately different policies:

- ``resolve_strict``: CSV columns are user-authored, so an unknown value is
  a row error the user should see.
- ``resolve_with_fallback``: OFX codes come from a bank, so unknown codes
  fall back to a derived value instead of rejecting the transaction.
"""

from collections.abc import Mapping
from enum import Enum

from src.core.result import Failure, Result, Success


def resolve_strict[E: Enum](
    enum_type: type[E], raw: str | None, label: str
) -> Result[E | None, str]:
    """Resolve free text to an enum member, rejecting unknown values.

    Matching is an exact, case-insensitive comparison with member names, so
    "credit_card" resolves to CREDIT_CARD but "credit card" is rejected.

    Args:
        enum_type: Enum class to resolve into.
        raw: Cell text. Blank or None means "not provided".
        label: Field name used in the error message.

    Returns:
        Success(member) or Success(None) for blank input.
        Failure(message) for unknown values.
    """
    if raw is None or not raw.strip():
        return Success(value=None)

    key = raw.strip().upper()
    member = enum_type.__members__.get(key)
    if member is not None:
        return Success(value=member)
    return Failure(error=f'Invalid {label} value "{raw.strip()}"')


def resolve_with_fallback[V](
    table: Mapping[str, V], code: str | None, fallback: V
) -> V:
    """Look a code up in a translation table, falling back when unknown.

    Args:
        table: Upper-case code -> value.
        code: Raw code (any case). None or blank uses the fallback.
        fallback: Value returned when the code is missing or unknown.

    Returns:
        The mapped value, or ``fallback``.
    """
    if code is None or not code.strip():
        return fallback
    return table.get(code.strip().upper(), fallback)
