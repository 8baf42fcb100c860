"""Domain entities.

Usage:
    from src.domain.entities import Transaction
"""

from src.domain.entities.transaction import Transaction

__all__ = ["Transaction"]
