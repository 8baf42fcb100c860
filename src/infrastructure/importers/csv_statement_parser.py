"""CSV statement parser.

Parses delimited bank statements exported by banks or spreadsheets.
Layout (delimiter, header names, date patterns, number conventions) comes
from a ``CsvConfiguration``; nothing about the layout is guessed.

Architecture:
    CsvStatementParser produces:
    - ParsedEntry per readable data row
    - ImportIssue (PARSING_ERROR) per unreadable data row

    Header and decoding problems fail the whole statement.
"""

import csv
import io
import re
from collections.abc import Iterator
from datetime import datetime
from decimal import Decimal
from zoneinfo import ZoneInfo

import structlog

from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.enums import TransactionSource, TransactionSubtype, TransactionType
from src.domain.errors import StatementImportError, TransactionError
from src.domain.protocols import ParsedEntry, StatementParseOutcome
from src.domain.value_objects import CsvConfiguration, ImportIssue
from src.infrastructure.importers.enum_resolution import resolve_strict

logger = structlog.get_logger(__name__)

_AMOUNT_PATTERN = re.compile(r"-?(\d+(\.\d*)?|\.\d+)")


class _Columns:
    """Header positions resolved once per file."""

    def __init__(self, header: list[str], config: CsvConfiguration) -> None:
        self._lookup: dict[str, int] = {}
        for index, name in enumerate(header):
            self._lookup.setdefault(_normalize_key(name), index)

        self.date = self._lookup.get(_normalize_key(config.date_column))
        self.description = self._lookup.get(_normalize_key(config.description_column))
        self.amount = self._lookup.get(_normalize_key(config.amount_column))
        self.type = self._optional(config.type_column)
        self.subtype = self._optional(config.subtype_column)
        self.source = self._optional(config.source_column)
        self.category = self._optional(config.category_column)
        self.subcategory = self._optional(config.subcategory_column)
        self.counter_account = self._optional(config.counter_account_column)
        self.external_id = self._optional(config.external_id_column)

    def _optional(self, name: str | None) -> int | None:
        if not name or not name.strip():
            return None
        return self._lookup.get(_normalize_key(name))


def _normalize_key(value: str | None) -> str:
    return value.strip().lower() if value else ""


def _cell(row: list[str], index: int | None) -> str | None:
    if index is None or index >= len(row):
        return None
    return row[index].strip()


class CsvStatementParser:
    """Parser for delimited bank statements.

    Thread-safe: No mutable state, can be reused across requests.

    Example:
        >>> parser = CsvStatementParser()
        >>> result = parser.parse(file_bytes, CsvConfiguration(), ZoneInfo("UTC"))
        >>> match result:
        ...     case Success(value=outcome):
        ...         print(f"{len(outcome.entries)} entries, {len(outcome.issues)} issues")
        ...     case Failure(error=error):
        ...         print(f"Parse failed: {error.message}")
    """

    def parse(
        self,
        content: bytes,
        config: CsvConfiguration,
        zone: ZoneInfo,
        file_name: str | None = None,
    ) -> Result[StatementParseOutcome, StatementImportError]:
        """Parse CSV content into entries and row issues.

        Args:
            content: Raw file bytes.
            config: Statement layout.
            zone: Time zone statement dates are interpreted in.
            file_name: Original filename for logging and errors.

        Returns:
            Success(StatementParseOutcome): Entries and row issues.
            Failure(StatementImportError): Missing header/column or unreadable file.
        """
        if not config.contains_header:
            return Failure(
                error=StatementImportError(
                    code=ErrorCode.IMPORT_CONFIGURATION_INVALID,
                    message="CSV files must declare a header row",
                    file_name=file_name,
                )
            )

        encoding = config.resolve_charset()
        logger.info(
            "csv_parse_started",
            file_name=file_name,
            file_size=len(content),
            encoding=encoding,
            delimiter=config.delimiter,
        )

        try:
            with io.TextIOWrapper(
                io.BytesIO(content), encoding=encoding, newline=""
            ) as stream:
                rows = (
                    row
                    for row in csv.reader(stream, delimiter=config.delimiter)
                    if any(cell.strip() for cell in row)
                )
                header = next(rows, [])
                columns = _Columns(header, config)

                missing = self._check_required_columns(columns, config, file_name)
                if isinstance(missing, Failure):
                    return missing

                outcome = self._parse_rows(rows, columns, config, zone)
        except (UnicodeDecodeError, csv.Error) as e:
            logger.warning(
                "csv_parse_failed",
                file_name=file_name,
                error=str(e),
            )
            return Failure(
                error=StatementImportError(
                    code=ErrorCode.IMPORT_DOCUMENT_INVALID,
                    message=f"Unable to read CSV file: {e}",
                    file_name=file_name,
                )
            )

        logger.info(
            "csv_parse_succeeded",
            file_name=file_name,
            entry_count=len(outcome.entries),
            issue_count=len(outcome.issues),
        )
        return Success(value=outcome)

    def _check_required_columns(
        self,
        columns: _Columns,
        config: CsvConfiguration,
        file_name: str | None,
    ) -> Result[None, StatementImportError]:
        required = (
            ("date", config.date_column, columns.date),
            ("description", config.description_column, columns.description),
            ("amount", config.amount_column, columns.amount),
        )
        for label, name, index in required:
            if index is None:
                logger.warning(
                    "csv_column_missing",
                    file_name=file_name,
                    column=name,
                )
                return Failure(
                    error=StatementImportError(
                        code=ErrorCode.IMPORT_COLUMN_MISSING,
                        message=f'Required {label} column "{name}" not found in CSV header',
                        file_name=file_name,
                        details={"column": name},
                    )
                )
        return Success(value=None)

    def _parse_rows(
        self,
        rows: Iterator[list[str]],
        columns: _Columns,
        config: CsvConfiguration,
        zone: ZoneInfo,
    ) -> StatementParseOutcome:
        entries: list[ParsedEntry] = []
        issues: list[ImportIssue] = []

        for line_number, row in enumerate(rows, start=1):
            external_id = _cell(row, columns.external_id) or None
            result = self._parse_row(row, line_number, external_id, columns, config, zone)
            if isinstance(result, Failure):
                logger.debug(
                    "csv_row_rejected",
                    line_number=line_number,
                    reason=result.error,
                )
                issues.append(
                    ImportIssue.parsing_error(line_number, result.error, external_id)
                )
                continue
            entries.append(result.value)

        return StatementParseOutcome(entries=entries, issues=issues)

    def _parse_row(
        self,
        row: list[str],
        line_number: int,
        external_id: str | None,
        columns: _Columns,
        config: CsvConfiguration,
        zone: ZoneInfo,
    ) -> Result[ParsedEntry, str]:
        date_result = parse_date(_cell(row, columns.date), config.date_patterns, zone)
        if isinstance(date_result, Failure):
            return date_result

        amount_result = parse_amount(
            _cell(row, columns.amount),
            config.resolve_decimal_separator(),
            config.resolve_grouping_separator(),
        )
        if isinstance(amount_result, Failure):
            return amount_result

        description = _cell(row, columns.description)
        if not description:
            return Failure(error=TransactionError.MISSING_DESCRIPTION)

        type_result = resolve_strict(
            TransactionType, _cell(row, columns.type), "transaction type"
        )
        if isinstance(type_result, Failure):
            return type_result
        subtype_result = resolve_strict(
            TransactionSubtype, _cell(row, columns.subtype), "transaction subtype"
        )
        if isinstance(subtype_result, Failure):
            return subtype_result
        source_result = resolve_strict(
            TransactionSource, _cell(row, columns.source), "transaction source"
        )
        if isinstance(source_result, Failure):
            return source_result

        return Success(
            value=ParsedEntry(
                line_number=line_number,
                external_id=external_id,
                date=date_result.value,
                description=description,
                amount=amount_result.value,
                detected_type=type_result.value,
                detected_subtype=subtype_result.value,
                detected_source=source_result.value,
                category_value=_cell(row, columns.category),
                subcategory_value=_cell(row, columns.subcategory),
                counter_account_value=_cell(row, columns.counter_account),
            )
        )


def parse_date(
    raw: str | None, patterns: tuple[str, ...], zone: ZoneInfo
) -> Result[datetime, str]:
    """Parse a statement date with the first pattern that fully matches.

    Date-only patterns produce local midnight; date-time patterns keep the
    parsed wall-clock time. The result is attached to ``zone``.

    Args:
        raw: Cell text.
        patterns: strptime patterns tried in order.
        zone: Time zone of the statement.

    Returns:
        Success(datetime) or Failure(message).
    """
    if not raw:
        return Failure(error="Date value is missing")
    for pattern in patterns:
        try:
            parsed = datetime.strptime(raw, pattern)
        except ValueError:
            continue
        return Success(value=parsed.replace(tzinfo=zone))
    return Failure(error=f'Unable to parse date "{raw}" using configured patterns')


def parse_amount(
    raw: str | None, decimal_separator: str, grouping_separator: str
) -> Result[Decimal, str]:
    """Parse a localized signed amount.

    Handles ``(50.00)`` as negative, trailing minus (``12.00-``), a leading
    plus, grouping separators and a comma decimal separator.

    Args:
        raw: Cell text.
        decimal_separator: Locale decimal separator.
        grouping_separator: Locale grouping separator.

    Returns:
        Success(Decimal) or Failure(message).
    """
    if not raw:
        return Failure(error="Amount value is missing")

    normalized = raw.strip()
    negative = normalized.startswith("(") and normalized.endswith(")")
    if negative:
        normalized = normalized[1:-1]

    normalized = normalized.replace(" ", "").replace("\u00a0", "")
    normalized = normalized.replace(grouping_separator, "")
    normalized = normalized.replace(decimal_separator, ".")
    normalized = normalized.replace(",", ".").replace("+", "")
    if normalized.endswith("-"):
        normalized = "-" + normalized[:-1]

    if not _AMOUNT_PATTERN.fullmatch(normalized):
        return Failure(error=f'Unable to parse amount "{raw}"')

    amount = Decimal(normalized)
    if negative or amount < 0:
        return Success(value=-abs(amount))
    return Success(value=amount)

