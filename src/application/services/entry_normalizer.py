"""Entry normalization and mapping resolution.

Turns a ``ParsedEntry`` into a ``TransactionDraft`` by resolving every field
the statement left ambiguous against the command's mapping tables and
defaults. Pure: no I/O, no logging.

Resolution order:
    Type:            detected -> type table[category] -> amount sign -> default
    Subtype:         detected -> subtype table[category] -> default
    Source:          detected -> source table[counter-account] -> default
    Category id:     category table -> default (required)
    Subcategory id:  subcategory table -> default
    Counter-account: counter-account table -> default
"""

from collections.abc import Mapping
from dataclasses import dataclass

from src.application.commands.import_commands import ImportStatement
from src.application.dtos.import_dtos import TransactionDraft
from src.core.result import Failure, Result, Success
from src.domain.enums import TransactionSource, TransactionSubtype, TransactionType
from src.domain.errors import TransactionError
from src.domain.protocols import ParsedEntry


def normalize_key(value: str | None) -> str:
    """Trimmed, lower-cased lookup key ("" for None)."""
    return value.strip().lower() if value else ""


def normalize_table[V](table: Mapping[str, V] | None) -> dict[str, V]:
    """Build a lookup table keyed by normalized text.

    Blank keys are dropped and the first key wins when two keys normalize
    to the same text.
    """
    normalized: dict[str, V] = {}
    for key, value in (table or {}).items():
        lookup = normalize_key(key)
        if lookup and value is not None:
            normalized.setdefault(lookup, value)
    return normalized


def _lookup[V](table: Mapping[str, V], raw: str | None) -> V | None:
    key = normalize_key(raw)
    return table.get(key) if key else None


@dataclass(frozen=True, kw_only=True)
class NormalizedMappings:
    """The command's six mapping tables, normalized once per import."""

    categories: dict[str, int]
    subcategories: dict[str, int]
    counter_accounts: dict[str, int]
    types: dict[str, TransactionType]
    subtypes: dict[str, TransactionSubtype]
    sources: dict[str, TransactionSource]

    @classmethod
    def from_command(cls, command: ImportStatement) -> "NormalizedMappings":
        return cls(
            categories=normalize_table(command.category_mappings),
            subcategories=normalize_table(command.subcategory_mappings),
            counter_accounts=normalize_table(command.counter_account_mappings),
            types=normalize_table(command.type_mappings),
            subtypes=normalize_table(command.subtype_mappings),
            sources=normalize_table(command.source_mappings),
        )


def normalize_entry(
    entry: ParsedEntry,
    command: ImportStatement,
    mappings: NormalizedMappings,
) -> Result[TransactionDraft, str]:
    """Resolve a parsed entry into a transaction draft.

    Args:
        entry: Entry produced by a statement parser.
        command: Import command (defaults and responsibilities).
        mappings: Normalized mapping tables for this import.

    Returns:
        Success(TransactionDraft) or Failure(message) naming the first
        field that could not be resolved.
    """
    if entry.date is None:
        return Failure(error=TransactionError.MISSING_DATE)
    if entry.amount is None:
        return Failure(error=TransactionError.MISSING_AMOUNT)

    description = entry.description.strip() if entry.description else ""
    if not description:
        return Failure(error=TransactionError.MISSING_DESCRIPTION)

    transaction_type = (
        entry.detected_type
        or _lookup(mappings.types, entry.category_value)
        or _type_from_amount(entry)
        or command.default_type
    )
    if transaction_type is None:
        return Failure(error=TransactionError.UNRESOLVED_TYPE)

    category_id = _lookup(mappings.categories, entry.category_value)
    if category_id is None:
        category_id = command.default_category_id
    if category_id is None:
        return Failure(error=TransactionError.UNRESOLVED_CATEGORY)

    subcategory_id = _lookup(mappings.subcategories, entry.subcategory_value)
    if subcategory_id is None:
        subcategory_id = command.default_subcategory_id

    counter_account_id = _lookup(
        mappings.counter_accounts, entry.counter_account_value
    )
    if counter_account_id is None:
        counter_account_id = command.default_counter_account_id

    return Success(
        value=TransactionDraft(
            user_id=command.user_id,
            description=description,
            date=entry.date,
            amount=abs(entry.amount),
            transaction_type=transaction_type,
            category_id=category_id,
            subtype=(
                entry.detected_subtype
                or _lookup(mappings.subtypes, entry.category_value)
                or command.default_subtype
            ),
            source=(
                entry.detected_source
                or _lookup(mappings.sources, entry.counter_account_value)
                or command.default_source
            ),
            subcategory_id=subcategory_id,
            counter_account_id=counter_account_id,
            responsibilities=tuple(command.responsibilities),
        )
    )


def _type_from_amount(entry: ParsedEntry) -> TransactionType | None:
    if entry.amount is None:
        return None
    # zero carries no direction
    if entry.amount == 0:
        return None
    return TransactionType.from_amount_sign(entry.amount < 0)
