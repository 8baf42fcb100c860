"""Statement importers (CSV and OFX/QFX grammars).

Parsers turn uploaded bytes into ``StatementParseOutcome`` values: parsed
entries plus row-level issues. Whole-document failures are returned as
``Failure(StatementImportError)``.
"""

from src.infrastructure.importers.csv_statement_parser import CsvStatementParser
from src.infrastructure.importers.ofx_statement_parser import OfxStatementParser

__all__ = [
    "CsvStatementParser",
    "OfxStatementParser",
]
