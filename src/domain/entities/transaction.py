"""Transaction domain entity.

Persisted transaction record as returned by the transaction-creation
collaborator and by duplicate-candidate queries.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from src.domain.enums.transaction_source import TransactionSource
from src.domain.enums.transaction_subtype import TransactionSubtype
from src.domain.enums.transaction_type import TransactionType
from src.domain.value_objects.responsibility_allocation import (
    ResponsibilityAllocation,
)


@dataclass(frozen=True, kw_only=True)
class Transaction:
    """Stored financial transaction.

    **Design Principles**:
    - Immutable: imported records are never edited by the importer
    - Unsigned amount: direction lives in ``transaction_type``
    - Owner-scoped: every query is filtered by ``user_id``

    Attributes:
        id: Unique transaction identifier.
        user_id: Owner of the transaction.
        description: Human-readable description.
        date: When the transaction happened (timezone-aware).
        amount: Absolute transaction amount.
        transaction_type: INCOME or EXPENSE.
        category_id: Category the transaction is filed under.
        subtype: FIXED or VARIABLE (optional).
        source: Payment channel (optional).
        subcategory_id: Optional subcategory.
        counter_account_id: Optional counter-account (source entity).
        responsibilities: Allocation of the transaction between parties.
        created_at: When the record was stored.

    Example:
        >>> from uuid_extensions import uuid7
        >>> transaction = Transaction(
        ...     id=uuid7(),
        ...     user_id=user_id,
        ...     description="Groceries",
        ...     date=datetime(2024, 1, 1, tzinfo=ZoneInfo("America/Sao_Paulo")),
        ...     amount=Decimal("45.90"),
        ...     transaction_type=TransactionType.EXPENSE,
        ...     category_id=5,
        ...     created_at=datetime.now(UTC),
        ... )
        >>> assert transaction.is_expense()
    """

    # ========================================================================
    # Core Identifiers
    # ========================================================================

    id: UUID
    """Unique transaction identifier."""

    user_id: UUID
    """Owner of the transaction."""

    # ========================================================================
    # Financial Details
    # ========================================================================

    description: str
    """Description as it appeared on the statement (trimmed)."""

    date: datetime
    """Transaction date-time in the import's time zone."""

    amount: Decimal
    """Absolute amount. The sign is folded into ``transaction_type``."""

    # ========================================================================
    # Classification
    # ========================================================================

    transaction_type: TransactionType
    category_id: int
    subtype: TransactionSubtype | None = None
    source: TransactionSource | None = None
    subcategory_id: int | None = None
    counter_account_id: int | None = None

    responsibilities: tuple[ResponsibilityAllocation, ...] = field(
        default_factory=tuple
    )

    created_at: datetime | None = None
    """Timestamp when the record was stored."""

    def is_expense(self) -> bool:
        """Check if money left the owner's hands."""
        return self.transaction_type == TransactionType.EXPENSE

    def is_income(self) -> bool:
        """Check if money came in."""
        return self.transaction_type == TransactionType.INCOME
