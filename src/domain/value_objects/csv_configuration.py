"""CSV statement configuration value object.

Describes how a delimited statement is laid out: delimiter, locale-driven
number conventions, accepted date patterns and which header names hold
which fields.

Usage:
    from src.domain.value_objects import CsvConfiguration

    config = CsvConfiguration(
        delimiter=";",
        locale="pt-BR",
        date_patterns=("%d/%m/%Y",),
        category_column="categoria",
    )
"""

import codecs
from dataclasses import dataclass, field

from src.core.config import get_settings

DEFAULT_DATE_PATTERNS: tuple[str, ...] = ("%d/%m/%Y", "%Y-%m-%d", "%d-%m-%Y")

# Language -> (decimal separator, grouping separator)
_LOCALE_SEPARATORS: dict[str, tuple[str, str]] = {
    "pt": (",", "."),
    "de": (",", "."),
    "es": (",", "."),
    "it": (",", "."),
    "nl": (",", "."),
    "fr": (",", " "),
}
_DEFAULT_SEPARATORS = (".", ",")


def _default_locale() -> str:
    return get_settings().import_default_locale


def _default_charset() -> str:
    return get_settings().import_default_charset


@dataclass(frozen=True, slots=True, kw_only=True)
class CsvConfiguration:
    """Layout of a delimited statement file.

    Attributes:
        contains_header: Whether the first record is a header (required).
        delimiter: Single-character field delimiter.
        decimal_separator: Override for the locale's decimal separator.
        grouping_separator: Override for the locale's grouping separator.
        date_column: Header holding the transaction date.
        description_column: Header holding the description.
        amount_column: Header holding the signed amount.
        type_column: Optional header holding a TransactionType name.
        subtype_column: Optional header holding a TransactionSubtype name.
        source_column: Optional header holding a TransactionSource name.
        category_column: Optional header holding raw category text.
        subcategory_column: Optional header holding raw subcategory text.
        counter_account_column: Optional header holding raw counter-account text.
        external_id_column: Optional header holding the bank reference.
        date_patterns: strptime patterns tried in order.
        locale: BCP 47 tag driving default number separators.
        charset: Character set used to decode the file.
    """

    contains_header: bool = True
    delimiter: str = ";"
    decimal_separator: str | None = None
    grouping_separator: str | None = None
    date_column: str = "date"
    description_column: str = "description"
    amount_column: str = "amount"
    type_column: str | None = None
    subtype_column: str | None = None
    source_column: str | None = None
    category_column: str | None = None
    subcategory_column: str | None = None
    counter_account_column: str | None = None
    external_id_column: str | None = None
    date_patterns: tuple[str, ...] = DEFAULT_DATE_PATTERNS
    locale: str = field(default_factory=_default_locale)
    charset: str = field(default_factory=_default_charset)

    @property
    def language(self) -> str:
        """Lower-cased language subtag of the locale ("pt" for "pt-BR")."""
        return self.locale.replace("_", "-").split("-")[0].strip().lower()

    def resolve_decimal_separator(self) -> str:
        """Configured decimal separator, else the locale default."""
        if self.decimal_separator and self.decimal_separator.strip():
            return self.decimal_separator
        return _LOCALE_SEPARATORS.get(self.language, _DEFAULT_SEPARATORS)[0]

    def resolve_grouping_separator(self) -> str:
        """Configured grouping separator, else the locale default."""
        if self.grouping_separator and self.grouping_separator.strip():
            return self.grouping_separator
        return _LOCALE_SEPARATORS.get(self.language, _DEFAULT_SEPARATORS)[1]

    def resolve_charset(self) -> str:
        """Python codec name for the configured charset.

        Unknown charsets fall back to UTF-8. UTF-8 is read as ``utf-8-sig``
        so a leading byte-order mark never leaks into the first header.
        """
        try:
            name = codecs.lookup(self.charset).name
        except LookupError:
            name = "utf-8"
        return "utf-8-sig" if name == "utf-8" else name
