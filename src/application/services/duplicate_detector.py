"""Duplicate detection for imported entries.

Heuristic: an entry is a suspected duplicate when the owner already has a
transaction with the same absolute amount and description on the same
local calendar day.
"""

from datetime import datetime, time
from zoneinfo import ZoneInfo

from src.application.dtos.import_dtos import TransactionDraft
from src.domain.protocols.transaction_repository import TransactionRepository


class DuplicateDetector:
    """Checks drafts against stored transactions.

    Usage:
        detector = DuplicateDetector(transaction_repo)
        if await detector.is_duplicate(draft, zone):
            ...
    """

    def __init__(self, transaction_repo: TransactionRepository) -> None:
        self._transaction_repo = transaction_repo

    async def is_duplicate(self, draft: TransactionDraft, zone: ZoneInfo) -> bool:
        """Check whether a matching transaction already exists.

        Args:
            draft: Draft to check.
            zone: Import time zone defining the calendar day.

        Returns:
            True if at least one stored transaction matches.
        """
        start, end = day_bounds(draft.date, zone)
        matches = await self._transaction_repo.find_potential_duplicates(
            draft.user_id,
            draft.amount,
            draft.description,
            start,
            end,
        )
        return len(matches) > 0


def day_bounds(moment: datetime, zone: ZoneInfo) -> tuple[datetime, datetime]:
    """First and last instant of ``moment``'s calendar day in ``zone``."""
    local_day = moment.astimezone(zone).date() if moment.tzinfo else moment.date()
    return (
        datetime.combine(local_day, time.min, tzinfo=zone),
        datetime.combine(local_day, time.max, tzinfo=zone),
    )
