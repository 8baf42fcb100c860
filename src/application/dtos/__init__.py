"""Data Transfer Objects (DTOs) for application layer.

Usage:
    from src.application.dtos import ImportResult, TransactionDraft

Note:
    DTOs are NOT the same as:
    - Domain protocol data types (ParsedEntry lives in the domain layer)
    - Parser internals (implementation details in infrastructure)
"""

from src.application.dtos.import_dtos import ImportResult, TransactionDraft

__all__ = [
    "ImportResult",
    "TransactionDraft",
]
