"""Transaction creation protocol.

Port for the collaborator that validates and persists a fully resolved
transaction draft. Each call is an independent unit of work; the importer
never wraps a batch in one all-or-nothing transaction.
"""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from src.application.dtos.import_dtos import TransactionDraft
    from src.core.errors import ValidationError
    from src.core.result import Result
    from src.domain.entities.transaction import Transaction


class TransactionCreatorProtocol(Protocol):
    """Protocol for persisting imported transactions."""

    async def create(
        self, draft: "TransactionDraft"
    ) -> "Result[Transaction, ValidationError]":
        """Validate and persist a draft.

        Args:
            draft: Fully resolved transaction draft.

        Returns:
            Success(Transaction): The stored record.
            Failure(ValidationError): The draft was rejected.
        """
        ...
