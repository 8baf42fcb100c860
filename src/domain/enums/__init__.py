"""Domain enums for statement imports.

Available Enums:
    - TransactionType: INCOME / EXPENSE
    - TransactionSubtype: FIXED / VARIABLE
    - TransactionSource: payment channel (cash, card, bank transaction, ...)
    - StatementFormat: AUTO / CSV / OFX
    - DuplicateStrategy: SKIP / ALLOW
    - ImportIssueType: per-line issue kinds
"""

from src.domain.enums.duplicate_strategy import DuplicateStrategy
from src.domain.enums.import_issue_type import ImportIssueType
from src.domain.enums.statement_format import StatementFormat
from src.domain.enums.transaction_source import TransactionSource
from src.domain.enums.transaction_subtype import TransactionSubtype
from src.domain.enums.transaction_type import TransactionType

__all__ = [
    "DuplicateStrategy",
    "ImportIssueType",
    "StatementFormat",
    "TransactionSource",
    "TransactionSubtype",
    "TransactionType",
]
