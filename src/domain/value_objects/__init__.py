"""Domain value objects.

Immutable values shared by parsers, services and the import handler.
"""

from src.domain.value_objects.csv_configuration import (
    DEFAULT_DATE_PATTERNS,
    CsvConfiguration,
)
from src.domain.value_objects.import_issue import ImportIssue
from src.domain.value_objects.responsibility_allocation import (
    ResponsibilityAllocation,
)

__all__ = [
    "CsvConfiguration",
    "DEFAULT_DATE_PATTERNS",
    "ImportIssue",
    "ResponsibilityAllocation",
]
