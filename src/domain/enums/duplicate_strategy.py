"""Duplicate-handling policy for statement imports."""

from enum import Enum


class DuplicateStrategy(str, Enum):
    """What to do with an entry that looks like an existing transaction.

    SKIP records a DUPLICATE_SKIPPED issue and creates nothing.
    ALLOW creates the transaction anyway.
    """

    SKIP = "skip"
    ALLOW = "allow"
