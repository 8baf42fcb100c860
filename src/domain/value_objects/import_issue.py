"""Import issue value object.

One line of the per-entry report returned by a statement import.
"""

from dataclasses import dataclass

from src.domain.enums import ImportIssueType
from src.domain.errors import TransactionError


@dataclass(frozen=True, slots=True, kw_only=True)
class ImportIssue:
    """Problem (or policy skip) attached to a single statement entry.

    Attributes:
        line_number: Sequence number of the entry in the statement (1-based).
        message: Human-readable explanation.
        issue_type: Kind of issue.
        external_reference: Bank-assigned reference (FITID / external id column).
    """

    line_number: int
    message: str
    issue_type: ImportIssueType
    external_reference: str | None = None

    @classmethod
    def parsing_error(
        cls,
        line_number: int,
        message: str | None,
        external_reference: str | None = None,
    ) -> "ImportIssue":
        """Build a PARSING_ERROR issue, substituting a generic message when blank."""
        text = message.strip() if message else ""
        return cls(
            line_number=line_number,
            message=text or TransactionError.PROCESSING_FAILED,
            issue_type=ImportIssueType.PARSING_ERROR,
            external_reference=external_reference,
        )
