"""Transaction persistence adapters."""

from src.infrastructure.persistence.in_memory_transaction_store import (
    InMemoryTransactionStore,
)

__all__ = ["InMemoryTransactionStore"]
