"""In-memory transaction store.

Process-local adapter implementing both ``TransactionRepository`` and
``TransactionCreatorProtocol``. Used for local runs and as the default
collaborator wired by the container when no external persistence is given.

Reference:
    - src/domain/protocols/transaction_repository.py
    - src/domain/protocols/transaction_creator_protocol.py
"""

from datetime import UTC, datetime
from decimal import Decimal
from uuid import UUID

import structlog
from uuid_extensions import uuid7

from src.application.dtos.import_dtos import TransactionDraft
from src.core.enums import ErrorCode
from src.core.errors import ValidationError
from src.core.result import Failure, Result, Success
from src.domain.entities import Transaction

logger = structlog.get_logger(__name__)


class InMemoryTransactionStore:
    """Dictionary-backed transaction storage.

    This class does NOT inherit from the protocols (structural typing).

    Example:
        >>> store = InMemoryTransactionStore()
        >>> result = await store.create(draft)
        >>> matches = await store.find_potential_duplicates(
        ...     draft.user_id, draft.amount, draft.description, start, end
        ... )
    """

    def __init__(self) -> None:
        self._transactions: dict[UUID, Transaction] = {}

    def __len__(self) -> int:
        return len(self._transactions)

    async def create(self, draft: TransactionDraft) -> Result[Transaction, ValidationError]:
        """Store a draft as a new transaction.

        Args:
            draft: Fully resolved transaction draft.

        Returns:
            Success(Transaction): Stored record with a UUIDv7 id.
            Failure(ValidationError): Non-positive amount.
        """
        if draft.amount <= 0:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.TRANSACTION_REJECTED,
                    message="Amount must be greater than zero",
                    field="amount",
                )
            )

        transaction = Transaction(
            id=uuid7(),
            user_id=draft.user_id,
            description=draft.description,
            date=draft.date,
            amount=draft.amount,
            transaction_type=draft.transaction_type,
            category_id=draft.category_id,
            subtype=draft.subtype,
            source=draft.source,
            subcategory_id=draft.subcategory_id,
            counter_account_id=draft.counter_account_id,
            responsibilities=draft.responsibilities,
            created_at=datetime.now(UTC),
        )
        self._transactions[transaction.id] = transaction
        logger.debug(
            "transaction_stored",
            transaction_id=str(transaction.id),
            user_id=str(transaction.user_id),
        )
        return Success(value=transaction)

    async def find_potential_duplicates(
        self,
        user_id: UUID,
        amount: Decimal,
        description: str,
        start: datetime,
        end: datetime,
    ) -> list[Transaction]:
        """Find stored transactions with the same owner, amount and description.

        Args:
            user_id: Owner to scope the query to.
            amount: Absolute amount to match.
            description: Description to match exactly.
            start: Earliest transaction date (inclusive).
            end: Latest transaction date (inclusive).

        Returns:
            Matching transactions ordered by date.
        """
        matches = [
            t
            for t in self._transactions.values()
            if t.user_id == user_id
            and t.amount == amount
            and t.description == description
            and start <= t.date <= end
        ]
        return sorted(matches, key=lambda t: t.date)
