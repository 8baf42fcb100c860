"""Immutable row accumulator for statement imports.

Every step returns a new ``ImportTally``; the handler threads it through
the entry loop and turns the final value into an ``ImportResult``.
"""

from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal

from src.application.dtos.import_dtos import ImportResult, TransactionDraft
from src.domain.entities import Transaction
from src.domain.value_objects import ImportIssue

type DraftKey = tuple[date, Decimal, str]


def draft_key(draft: TransactionDraft) -> DraftKey:
    """Calendar day, amount and description of a draft."""
    return (draft.date.date(), draft.amount, draft.description)


@dataclass(frozen=True, slots=True, kw_only=True)
class ImportTally:
    """Counters, issues and created records collected so far.

    Attributes:
        processed: Entries that produced a draft.
        created: Transactions created.
        duplicates: Entries skipped as suspected duplicates.
        issues: Issues in the order they were raised.
        transactions: Created transactions.
        accepted_keys: Keys of drafts accepted earlier in this batch.
    """

    processed: int = 0
    created: int = 0
    duplicates: int = 0
    issues: tuple[ImportIssue, ...] = ()
    transactions: tuple[Transaction, ...] = ()
    accepted_keys: frozenset[DraftKey] = frozenset()

    @classmethod
    def seeded(cls, issues: list[ImportIssue]) -> "ImportTally":
        """Start a tally with the issues a parser already reported."""
        return cls(issues=tuple(issues))

    def with_issue(self, issue: ImportIssue) -> "ImportTally":
        return replace(self, issues=(*self.issues, issue))

    def with_processed(self) -> "ImportTally":
        return replace(self, processed=self.processed + 1)

    def with_duplicate(self, issue: ImportIssue) -> "ImportTally":
        return replace(
            self,
            duplicates=self.duplicates + 1,
            issues=(*self.issues, issue),
        )

    def with_accepted(self, draft: TransactionDraft) -> "ImportTally":
        """Remember a draft so later identical rows count as duplicates."""
        return replace(self, accepted_keys=self.accepted_keys | {draft_key(draft)})

    def with_created(
        self, draft: TransactionDraft, transaction: Transaction
    ) -> "ImportTally":
        return replace(
            self.with_accepted(draft),
            created=self.created + 1,
            transactions=(*self.transactions, transaction),
        )

    def seen(self, draft: TransactionDraft) -> bool:
        """Check whether an identical draft was accepted earlier in this batch."""
        return draft_key(draft) in self.accepted_keys

    def to_result(self, *, dry_run: bool, total_entries: int) -> ImportResult:
        return ImportResult(
            dry_run=dry_run,
            total_entries=total_entries,
            processed_entries=self.processed,
            created_transactions=self.created,
            duplicate_entries=self.duplicates,
            issues=list(self.issues),
            transactions=list(self.transactions),
        )
