"""Statement import errors (whole-batch failures).

Returned when an import cannot produce any entries: the request is
misconfigured, the format cannot be determined, a required CSV column is
absent, or the document itself is unreadable. Row-level problems never use
this type; they become import issues.

Architecture:
    - Domain layer error (part of the parser/handler contract)
    - Inherits from DomainError (core layer)
    - Used in Result types (railway-oriented programming)

Usage:
    from src.domain.errors import StatementImportError
    from src.core.enums import ErrorCode
    from src.core.result import Failure

    return Failure(
        error=StatementImportError(
            code=ErrorCode.IMPORT_DOCUMENT_INVALID,
            message="Unable to parse OFX file",
            file_name="extrato.ofx",
        )
    )
"""

from dataclasses import dataclass

from src.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class StatementImportError(DomainError):
    """Request-level statement import failure.

    Attributes:
        code: Domain ErrorCode (IMPORT_*).
        message: Human-readable message.
        file_name: Name of the uploaded file, when known.
        details: Additional context.
    """

    file_name: str | None = None
