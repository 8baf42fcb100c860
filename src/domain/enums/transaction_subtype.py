"""Transaction subtype enumeration.

Second level of the classification: whether a transaction recurs with a
fixed value or varies from period to period.
"""

from enum import Enum


class TransactionSubtype(str, Enum):
    """Recurrence profile of a transaction."""

    FIXED = "fixed"  # Rent, subscriptions, salary
    VARIABLE = "variable"  # Groceries, fuel, leisure
