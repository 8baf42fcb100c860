"""Transaction draft error messages.

Messages attached to PARSING_ERROR issues when an entry cannot be turned
into a transaction draft.

Architecture:
    - Domain layer errors (no infrastructure dependencies)
    - Used in Result types (railway-oriented programming)
    - Never raised as exceptions (return Failure(error) instead)

Usage:
    from src.domain.errors import TransactionError
    from src.core.result import Failure

    if entry.amount is None:
        return Failure(error=TransactionError.MISSING_AMOUNT)
"""


class TransactionError:
    """Transaction draft error constants.

    These are NOT exceptions - they are error value constants used in the
    railway-oriented programming pattern.
    """

    MISSING_DATE = "Transaction date is required"
    """Entry has no date (e.g. an OFX transaction posted on 00000000)."""

    MISSING_AMOUNT = "Transaction amount is required"
    """Entry reached normalization without an amount.

    The bundled parsers reject such rows first (CSV row issue, OFX document
    failure); this guards entries from other parser implementations.
    """

    MISSING_DESCRIPTION = "Description cannot be blank"
    """Entry description is empty after trimming."""

    UNRESOLVED_TYPE = "Unable to determine transaction type"
    """No detected type, no type mapping, zero amount and no default type."""

    UNRESOLVED_CATEGORY = "No category mapping or default category provided"
    """Category text matched no mapping and the request has no default."""

    PROCESSING_FAILED = "Failed to process entry"
    """Fallback message when a failure carries no text."""
