"""Transaction source enumeration.

Payment channel the money moved through. OFX bank statements are tagged
BANK_TRANSACTION and credit-card statements CREDIT_CARD; CSV statements may
carry the channel in a column or receive it from mappings/defaults.
"""

from enum import Enum


class TransactionSource(str, Enum):
    """Payment channel of a transaction."""

    CASH = "cash"
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    BANK_TRANSACTION = "bank_transaction"
    OTHER = "other"
