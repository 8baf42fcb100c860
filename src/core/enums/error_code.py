"""Machine-readable error codes.

Codes follow the ENTITY_ACTION_REASON naming convention and travel inside
``DomainError`` values returned through ``Result`` types.

Categories:
- Validation errors (INVALID_*, VALIDATION_*)
- Statement import errors (IMPORT_*)
- Transaction persistence errors (TRANSACTION_*)
"""

from enum import Enum


class ErrorCode(Enum):
    """Error codes shared by every layer."""

    # Validation errors
    VALIDATION_FAILED = "validation_failed"
    INVALID_TIMEZONE = "invalid_timezone"
    INVALID_SEPARATOR = "invalid_separator"
    INVALID_RESPONSIBILITY_TOTAL = "invalid_responsibility_total"

    # Statement import errors (whole-batch)
    IMPORT_CONFIGURATION_INVALID = "import_configuration_invalid"
    IMPORT_FORMAT_UNRESOLVED = "import_format_unresolved"
    IMPORT_COLUMN_MISSING = "import_column_missing"
    IMPORT_DOCUMENT_INVALID = "import_document_invalid"

    # Transaction persistence errors
    TRANSACTION_REJECTED = "transaction_rejected"
