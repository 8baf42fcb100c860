"""Statement format resolution.

Decides which grammar reads an upload.

Precedence:
    1. Explicit (non-AUTO) format on the command
    2. Filename extension (.csv, .ofx, .qfx; case-insensitive)
    3. Content type ("csv" substring or exactly "text/plain"; "ofx" substring)
"""

from pathlib import PurePath

from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.enums import StatementFormat
from src.domain.errors import StatementImportError

_EXTENSIONS: dict[str, StatementFormat] = {
    ".csv": StatementFormat.CSV,
    ".ofx": StatementFormat.OFX,
    ".qfx": StatementFormat.OFX,
}


def resolve_statement_format(
    hint: StatementFormat | None,
    file_name: str | None,
    content_type: str | None,
) -> Result[StatementFormat, StatementImportError]:
    """Resolve the concrete statement format for an upload.

    Args:
        hint: Format requested by the caller (AUTO or None to detect).
        file_name: Original filename.
        content_type: Upload MIME type.

    Returns:
        Success(StatementFormat.CSV | StatementFormat.OFX).
        Failure(StatementImportError): Nothing identifies the format.

    Example:
        >>> resolve_statement_format(StatementFormat.AUTO, "extrato.OFX", None)
        Success(value=<StatementFormat.OFX: 'ofx'>)
    """
    if hint is not None and hint != StatementFormat.AUTO:
        return Success(value=hint)

    if file_name:
        by_extension = _EXTENSIONS.get(PurePath(file_name.strip()).suffix.lower())
        if by_extension is not None:
            return Success(value=by_extension)

    if content_type:
        normalized = content_type.strip().lower()
        if "csv" in normalized or normalized == "text/plain":
            return Success(value=StatementFormat.CSV)
        if "ofx" in normalized:
            return Success(value=StatementFormat.OFX)

    return Failure(
        error=StatementImportError(
            code=ErrorCode.IMPORT_FORMAT_UNRESOLVED,
            message="Unable to detect statement format; specify CSV or OFX explicitly",
            file_name=file_name,
            details={"content_type": content_type or ""},
        )
    )
