"""Domain protocols (ports) package.

Infrastructure adapters and external collaborators implement these
protocols without inheritance (PEP 544 structural subtyping).

Usage:
    from src.domain.protocols import TransactionRepository, LoggerProtocol
"""

from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.statement_parser_protocol import (
    CsvStatementParserProtocol,
    OfxStatementParserProtocol,
    ParsedEntry,
    StatementParseOutcome,
)
from src.domain.protocols.transaction_creator_protocol import (
    TransactionCreatorProtocol,
)
from src.domain.protocols.transaction_repository import TransactionRepository

__all__ = [
    "CsvStatementParserProtocol",
    "LoggerProtocol",
    "OfxStatementParserProtocol",
    "ParsedEntry",
    "StatementParseOutcome",
    "TransactionCreatorProtocol",
    "TransactionRepository",
]
