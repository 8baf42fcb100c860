"""Domain errors package.

Usage:
    from src.domain.errors import StatementImportError, TransactionError
"""

from src.domain.errors.statement_import_error import StatementImportError
from src.domain.errors.transaction_error import TransactionError

__all__ = [
    "StatementImportError",
    "TransactionError",
]
