"""StatementParserProtocol and parsed-entry data types.

Port for statement grammars (CSV, OFX). Infrastructure parsers return
``StatementParseOutcome`` values: the entries they could read plus the
row-level issues they collected. Whole-document failures come back as
``Failure(StatementImportError)``.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Protocol
from zoneinfo import ZoneInfo

from src.domain.enums import TransactionSource, TransactionSubtype, TransactionType
from src.domain.value_objects.import_issue import ImportIssue

if TYPE_CHECKING:
    from src.core.result import Result
    from src.domain.errors import StatementImportError
    from src.domain.value_objects.csv_configuration import CsvConfiguration


@dataclass(frozen=True, kw_only=True)
class ParsedEntry:
    """One statement row/transaction, before mapping resolution.

    Attributes:
        line_number: 1-based sequence number within the statement.
        external_id: Bank reference (OFX FITID or CSV external id column).
        date: Transaction date-time in the import's time zone.
        description: Trimmed description.
        amount: Signed amount (negative = money out).
        detected_type: Type read from the file, if any.
        detected_subtype: Subtype read from the file, if any.
        detected_source: Payment channel read from (or implied by) the file.
        category_value: Raw category text for mapping lookups.
        subcategory_value: Raw subcategory text for mapping lookups.
        counter_account_value: Raw counter-account text for mapping lookups.
    """

    line_number: int
    external_id: str | None
    date: datetime | None
    description: str
    amount: Decimal | None
    detected_type: TransactionType | None = None
    detected_subtype: TransactionSubtype | None = None
    detected_source: TransactionSource | None = None
    category_value: str | None = None
    subcategory_value: str | None = None
    counter_account_value: str | None = None


@dataclass(frozen=True, kw_only=True)
class StatementParseOutcome:
    """Entries and row-level issues produced by a parser.

    Attributes:
        entries: Successfully parsed entries, in statement order.
        issues: PARSING_ERROR issues for rows that could not be read.
    """

    entries: list[ParsedEntry] = field(default_factory=list)
    issues: list[ImportIssue] = field(default_factory=list)


class CsvStatementParserProtocol(Protocol):
    """Protocol for delimited statement grammars."""

    def parse(
        self,
        content: bytes,
        config: "CsvConfiguration",
        zone: ZoneInfo,
        file_name: str | None = None,
    ) -> "Result[StatementParseOutcome, StatementImportError]":
        """Parse CSV bytes laid out as described by ``config``.

        Args:
            content: Raw file bytes.
            config: Statement layout.
            zone: Time zone statement dates are interpreted in.
            file_name: Original filename for logging and errors.

        Returns:
            Success(StatementParseOutcome): Entries and row issues.
            Failure(StatementImportError): Whole-statement failure.
        """
        ...


class OfxStatementParserProtocol(Protocol):
    """Protocol for OFX/QFX statement grammars."""

    def parse(
        self,
        content: bytes,
        zone: ZoneInfo,
        file_name: str | None = None,
    ) -> "Result[StatementParseOutcome, StatementImportError]":
        """Parse an OFX document.

        Returns:
            Success(StatementParseOutcome): Entries (no row issues).
            Failure(StatementImportError): Document could not be read.
        """
        ...
