"""Responsibility allocation value object.

Splits an imported transaction between responsible parties. The same
allocation list is copied onto every transaction of an import; it is not
configurable per row.
"""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True, slots=True, kw_only=True)
class ResponsibilityAllocation:
    """Share of a transaction assigned to one responsible party.

    Attributes:
        responsible_id: Identifier of the responsible party.
        percentage: Share of the transaction (0-100).
        notes: Optional free-text note.
    """

    responsible_id: int
    percentage: Decimal
    notes: str | None = None
