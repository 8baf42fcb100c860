"""Import DTOs (Data Transfer Objects).

Dataclasses passed between the import handler, the transaction creation
collaborator and the presentation layer.

DTOs:
    - TransactionDraft: Fully resolved transaction, ready to be created
    - ImportResult: Result of the ImportStatement command
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from src.domain.entities import Transaction
from src.domain.enums import TransactionSource, TransactionSubtype, TransactionType
from src.domain.value_objects import ImportIssue, ResponsibilityAllocation


@dataclass(frozen=True, kw_only=True)
class TransactionDraft:
    """Transaction built from one statement entry.

    Attributes:
        user_id: Owner of the transaction.
        description: Trimmed description.
        date: Transaction date-time in the import's time zone.
        amount: Absolute amount.
        transaction_type: Resolved type.
        category_id: Resolved category.
        subtype: Resolved subtype (optional).
        source: Resolved source (optional).
        subcategory_id: Resolved subcategory (optional).
        counter_account_id: Resolved counter-account (optional).
        responsibilities: Allocation copied from the command.
    """

    user_id: UUID
    description: str
    date: datetime
    amount: Decimal
    transaction_type: TransactionType
    category_id: int
    subtype: TransactionSubtype | None = None
    source: TransactionSource | None = None
    subcategory_id: int | None = None
    counter_account_id: int | None = None
    responsibilities: tuple[ResponsibilityAllocation, ...] = ()


@dataclass(frozen=True, kw_only=True)
class ImportResult:
    """Result of a statement import.

    Attributes:
        dry_run: Whether the import was simulated.
        total_entries: Entries read from the statement.
        processed_entries: Entries that produced a transaction draft.
        created_transactions: Transactions actually created.
        duplicate_entries: Entries skipped as suspected duplicates.
        issues: Per-entry issues, in statement order (parser issues first).
        transactions: Created transactions (empty on dry-run).
    """

    dry_run: bool
    total_entries: int
    processed_entries: int
    created_transactions: int
    duplicate_entries: int
    issues: list[ImportIssue] = field(default_factory=list)
    transactions: list[Transaction] = field(default_factory=list)

    @property
    def message(self) -> str:
        """Human-readable summary."""
        prefix = "Dry run: " if self.dry_run else ""
        return (
            f"{prefix}{self.processed_entries} of {self.total_entries} entries processed, "
            f"{self.created_transactions} created, "
            f"{self.duplicate_entries} duplicates skipped, "
            f"{len(self.issues)} issues"
        )
