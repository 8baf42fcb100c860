"""Transaction repository protocol.

Read-side port consulted by the duplicate detector. Persistence itself is
owned by an external collaborator; the importer only needs one query.
"""

from datetime import datetime
from decimal import Decimal
from typing import Protocol
from uuid import UUID

from src.domain.entities.transaction import Transaction


class TransactionRepository(Protocol):
    """Protocol for looking up stored transactions.

    **Implementation Notes**:
    - Amount comparison is on the stored absolute amount
    - Description comparison is exact (the importer already trims it)
    - The date range is inclusive at both ends
    """

    async def find_potential_duplicates(
        self,
        user_id: UUID,
        amount: Decimal,
        description: str,
        start: datetime,
        end: datetime,
    ) -> list[Transaction]:
        """Find transactions that look like the given entry.

        Args:
            user_id: Owner to scope the query to.
            amount: Absolute amount to match.
            description: Description to match.
            start: Earliest transaction date (inclusive).
            end: Latest transaction date (inclusive).

        Returns:
            Matching transactions (empty list if none).

        Example:
            >>> matches = await repo.find_potential_duplicates(
            ...     user_id,
            ...     Decimal("45.90"),
            ...     "Groceries",
            ...     start=datetime(2024, 1, 1, tzinfo=zone),
            ...     end=datetime(2024, 1, 1, 23, 59, 59, 999999, tzinfo=zone),
            ... )
        """
        ...
