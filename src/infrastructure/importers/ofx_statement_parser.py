"""OFX/QFX statement parser.

Parses OFX (Open Financial Exchange) statements, including Quicken's QFX
variant, into parsed entries.

Uses the ofxparse library for SGML/XML parsing.

Architecture:
    OfxStatementParser walks:
    - Bank statements (STMTRS) -> source BANK_TRANSACTION
    - Credit card statements (CCSTMTRS) -> source CREDIT_CARD

    Investment statements are ignored. One sequence counter runs across all
    statements; transactions are numbered in posting-date order inside each
    statement, undated transactions last.

    Posted times are kept on the statement's wall clock: values with an
    explicit offset are converted to the import time zone, values without one
    are read as local time in that zone.

Reference:
    - OFX Specification: https://www.ofx.net/
    - ofxparse library: https://github.com/jseutter/ofxparse
"""

import re
from datetime import UTC, datetime, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal
from io import BytesIO
from typing import Any
from zoneinfo import ZoneInfo

import structlog
from ofxparse import AccountType, OfxParser  # type: ignore[import-untyped]

from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.enums import TransactionSource, TransactionType
from src.domain.errors import StatementImportError
from src.domain.protocols import ParsedEntry, StatementParseOutcome
from src.infrastructure.importers.enum_resolution import resolve_with_fallback

logger = structlog.get_logger(__name__)

_CENT = Decimal("0.01")
_EARLIEST = datetime.min.replace(tzinfo=UTC)

# YYYYMMDD[HHMM[SS]][.XXX][[+-h[.m]:TZ]]
_OFX_DATETIME = re.compile(
    r"^(?P<stamp>\d{8}(?:\d{4}(?:\d{2})?)?)"
    r"(?:\.(?P<fraction>\d+))?"
    r"\s*(?:\[(?P<offset>[-+]?\d+(?:\.\d+)?)(?::[^\]]*)?\])?$"
)
_STAMP_FORMATS = {8: "%Y%m%d", 12: "%Y%m%d%H%M", 14: "%Y%m%d%H%M%S"}

# OFX TRNTYPE -> TransactionType
OFX_TRANSACTION_TYPES: dict[str, TransactionType] = {
    # Money in
    "CREDIT": TransactionType.INCOME,
    "INT": TransactionType.INCOME,
    "DIV": TransactionType.INCOME,
    "REPEATPMT": TransactionType.INCOME,
    "IN": TransactionType.INCOME,
    "OTHER": TransactionType.INCOME,
    # Money out
    "DEBIT": TransactionType.EXPENSE,
    "PAYMENT": TransactionType.EXPENSE,
    "ATM": TransactionType.EXPENSE,
    "POS": TransactionType.EXPENSE,
    "DIRECTDEBIT": TransactionType.EXPENSE,
    "DIRECTDEP": TransactionType.EXPENSE,
    "DEP": TransactionType.EXPENSE,
    "CHECK": TransactionType.EXPENSE,
    "FEE": TransactionType.EXPENSE,
    "SRVCHG": TransactionType.EXPENSE,
    "XFER": TransactionType.EXPENSE,
    "CASH": TransactionType.EXPENSE,
    "OUT": TransactionType.EXPENSE,
}

# Statement kinds imported, in walk order
_STATEMENT_SOURCES: tuple[tuple[int, TransactionSource], ...] = (
    (AccountType.Bank, TransactionSource.BANK_TRANSACTION),
    (AccountType.CreditCard, TransactionSource.CREDIT_CARD),
)


class WallClockOfxParser(OfxParser):
    """ofxparse parser that keeps the offset of posted date-times.

    Stock ofxparse shifts offset-bearing values to UTC and returns every
    value naive, so "21:00 at -3" and "21:00 local" become indistinguishable.
    This parser returns an aware datetime when the value carries a
    ``[+-h:TZ]`` bracket and a naive wall-clock value when it does not.
    All-zero dates ("00000000") parse to None.
    """

    @classmethod
    def parseOfxDateTime(cls, ofxDateTime: str) -> datetime | None:
        text = ofxDateTime.strip()
        if text[:8] == "00000000":
            return None

        match = _OFX_DATETIME.match(text)
        if match is None:
            raise ValueError(f'Invalid OFX date-time "{text}"')

        stamp = match.group("stamp")
        value = datetime.strptime(stamp, _STAMP_FORMATS[len(stamp)])
        fraction = match.group("fraction")
        if fraction:
            value = value.replace(microsecond=int(fraction[:6].ljust(6, "0")))

        offset = match.group("offset")
        if offset is None:
            return value
        return value.replace(tzinfo=timezone(timedelta(hours=float(offset))))


class OfxStatementParser:
    """Parser for OFX/QFX bank and credit card statements.

    Thread-safe: No mutable state, can be reused across requests.

    Example:
        >>> parser = OfxStatementParser()
        >>> result = parser.parse(file_bytes, ZoneInfo("America/Sao_Paulo"))
        >>> match result:
        ...     case Success(value=outcome):
        ...         print(f"Found {len(outcome.entries)} transactions")
        ...     case Failure(error=error):
        ...         print(f"Parse failed: {error.message}")
    """

    def parse(
        self,
        content: bytes,
        zone: ZoneInfo,
        file_name: str | None = None,
    ) -> Result[StatementParseOutcome, StatementImportError]:
        """Parse OFX content into entries.

        The document is read in strict mode: one malformed transaction fails
        the whole statement.

        Args:
            content: Raw file bytes.
            zone: Time zone entry dates are converted to.
            file_name: Original filename for logging and errors.

        Returns:
            Success(StatementParseOutcome): Entries (OFX never yields row issues).
            Failure(StatementImportError): If the document cannot be parsed.
        """
        logger.info(
            "ofx_parse_started",
            file_name=file_name,
            file_size=len(content),
        )

        try:
            with BytesIO(content) as file_handle:
                ofx = WallClockOfxParser.parse(file_handle, fail_fast=True)
        except Exception as e:
            logger.warning(
                "ofx_parse_failed",
                file_name=file_name,
                error=str(e),
            )
            return Failure(
                error=StatementImportError(
                    code=ErrorCode.IMPORT_DOCUMENT_INVALID,
                    message=f"Unable to parse OFX file: {e}",
                    file_name=file_name,
                )
            )

        entries: list[ParsedEntry] = []
        for account_type, source in _STATEMENT_SOURCES:
            for account in ofx.accounts:
                if account.type != account_type:
                    continue
                entries.extend(
                    self._parse_statement(account, source, zone, start=len(entries) + 1)
                )

        logger.info(
            "ofx_parse_succeeded",
            file_name=file_name,
            account_count=len(ofx.accounts),
            entry_count=len(entries),
        )
        return Success(value=StatementParseOutcome(entries=entries))

    def _parse_statement(
        self,
        account: Any,
        source: TransactionSource,
        zone: ZoneInfo,
        start: int,
    ) -> list[ParsedEntry]:
        """Convert one statement's transactions, numbering from ``start``."""
        statement = getattr(account, "statement", None)
        if statement is None or not statement.transactions:
            return []

        dated = [(to_local_datetime(txn.date, zone), txn) for txn in statement.transactions]
        dated.sort(key=lambda pair: (pair[0] is None, pair[0] or _EARLIEST))
        return [
            self._to_entry(txn, local_date, source, line_number)
            for line_number, (local_date, txn) in enumerate(dated, start=start)
        ]

    def _to_entry(
        self,
        txn: Any,
        local_date: datetime | None,
        source: TransactionSource,
        line_number: int,
    ) -> ParsedEntry:
        amount = Decimal(str(txn.amount)).quantize(_CENT, rounding=ROUND_HALF_UP)
        memo = (txn.memo or "").strip()
        payee = (txn.payee or "").strip()

        return ParsedEntry(
            line_number=line_number,
            external_id=str(txn.id) if txn.id else None,
            date=local_date,
            description=memo or payee,
            amount=amount,
            detected_type=resolve_with_fallback(
                OFX_TRANSACTION_TYPES,
                txn.type,
                TransactionType.from_amount_sign(amount < 0),
            ),
            detected_source=source,
        )


def to_local_datetime(value: datetime | None, zone: ZoneInfo) -> datetime | None:
    """Place a posted date-time in the statement zone.

    Values that carried an explicit offset are converted to ``zone``.
    Naive values are wall-clock times already in ``zone`` and keep their
    date and time.

    Args:
        value: Datetime from WallClockOfxParser, None for an undated entry.
        zone: Statement time zone.

    Returns:
        Timezone-aware datetime in ``zone``, or None when ``value`` is None.
    """
    if value is None:
        return None
    if value.tzinfo is not None:
        return value.astimezone(zone)
    return value.replace(tzinfo=zone)
