"""Transaction type enumeration.

Top level of the two-level classification (Type + Subtype). Every imported
transaction is either money coming in or money going out.
"""

from enum import Enum


class TransactionType(str, Enum):
    """Direction of a transaction.

    Statement Mapping Examples
    --------------------------
    OFX CREDIT / INT / DIV -> INCOME
    OFX DEBIT / POS / FEE -> EXPENSE
    CSV amount "-45,90" (no type column) -> EXPENSE
    """

    INCOME = "income"
    EXPENSE = "expense"

    @classmethod
    def from_amount_sign(cls, negative: bool) -> "TransactionType":
        """Infer the type from the sign of a signed amount.

        Args:
            negative: True when the signed amount is below zero.

        Returns:
            EXPENSE for negative amounts, INCOME otherwise.
        """
        return cls.EXPENSE if negative else cls.INCOME
