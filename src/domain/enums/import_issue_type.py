"""Kinds of per-line issues reported by a statement import."""

from enum import Enum


class ImportIssueType(str, Enum):
    """Why an entry did not become a transaction.

    PARSING_ERROR: the row could not be parsed, resolved or persisted.
    DUPLICATE_SKIPPED: the entry matched an existing transaction (policy SKIP).
    CONFIGURATION_REJECTED: the description is on the request's ignore-list.
    """

    PARSING_ERROR = "parsing_error"
    DUPLICATE_SKIPPED = "duplicate_skipped"
    CONFIGURATION_REJECTED = "configuration_rejected"
