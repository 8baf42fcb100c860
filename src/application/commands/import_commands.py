"""Import commands for statement uploads.

Commands for importing bank statements (CSV, OFX/QFX) into the
transaction ledger.

Architecture:
    - Commands are immutable value objects representing user intent
    - ImportStatementHandler executes the import and returns ImportResult
    - Rows are imported one by one; a bad row never aborts the batch
"""

from dataclasses import dataclass, field
from uuid import UUID

from src.core.config import get_settings
from src.domain.enums import (
    DuplicateStrategy,
    StatementFormat,
    TransactionSource,
    TransactionSubtype,
    TransactionType,
)
from src.domain.value_objects import CsvConfiguration, ResponsibilityAllocation


def _default_timezone() -> str:
    return get_settings().import_default_timezone


@dataclass(frozen=True, kw_only=True)
class ImportStatement:
    """Command to import a bank statement file.

    Mapping tables translate free text found in the statement (category
    column, counter-account column) into ids and enum values. Keys are
    matched trimmed and case-insensitively.

    Attributes:
        user_id: Owner of the imported transactions.
        file_content: Raw file bytes.
        file_name: Original filename (format detection and logging).
        content_type: Upload MIME type (format detection fallback).
        format: Explicit format, or AUTO to detect it.
        default_category_id: Category used when no mapping matches.
        default_subcategory_id: Subcategory used when no mapping matches.
        default_counter_account_id: Counter-account used when no mapping matches.
        default_type: Type used when nothing else determines it.
        default_subtype: Subtype used when nothing else determines it.
        default_source: Source used when nothing else determines it.
        duplicate_strategy: SKIP or ALLOW suspected duplicates.
        dry_run: Simulate the import without creating transactions.
        timezone: IANA zone that statement dates are interpreted in.
        csv: Layout of CSV statements (required for CSV).
        category_mappings: Category text -> category id.
        subcategory_mappings: Subcategory text -> subcategory id.
        counter_account_mappings: Counter-account text -> counter-account id.
        type_mappings: Category text -> TransactionType.
        subtype_mappings: Category text -> TransactionSubtype.
        source_mappings: Counter-account text -> TransactionSource.
        ignore_descriptions: Descriptions that are never imported.
        responsibilities: Allocation copied onto every created transaction.

    Example:
        >>> command = ImportStatement(
        ...     user_id=user.id,
        ...     file_content=upload.read(),
        ...     file_name="extrato.csv",
        ...     content_type="text/csv",
        ...     default_category_id=5,
        ...     timezone="America/Sao_Paulo",
        ...     csv=CsvConfiguration(locale="pt-BR"),
        ... )
    """

    user_id: UUID
    file_content: bytes
    file_name: str | None = None
    content_type: str | None = None
    format: StatementFormat = StatementFormat.AUTO

    default_category_id: int | None = None
    default_subcategory_id: int | None = None
    default_counter_account_id: int | None = None
    default_type: TransactionType | None = None
    default_subtype: TransactionSubtype | None = None
    default_source: TransactionSource | None = None

    duplicate_strategy: DuplicateStrategy = DuplicateStrategy.SKIP
    dry_run: bool = False
    timezone: str = field(default_factory=_default_timezone)
    csv: CsvConfiguration | None = None

    category_mappings: dict[str, int] = field(default_factory=dict)
    subcategory_mappings: dict[str, int] = field(default_factory=dict)
    counter_account_mappings: dict[str, int] = field(default_factory=dict)
    type_mappings: dict[str, TransactionType] = field(default_factory=dict)
    subtype_mappings: dict[str, TransactionSubtype] = field(default_factory=dict)
    source_mappings: dict[str, TransactionSource] = field(default_factory=dict)

    ignore_descriptions: tuple[str, ...] = ()
    responsibilities: tuple[ResponsibilityAllocation, ...] = ()
