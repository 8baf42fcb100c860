"""Dependency container for the statement importer.

Application-scoped singletons are ``@lru_cache()`` functions; handlers are
built per call so callers can plug in their own persistence collaborators.

Usage:
    from src.core.container import get_import_statement_handler

    handler = get_import_statement_handler(
        repository=my_repository,
        creator=my_creator,
    )
    result = await handler.handle(command)
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from src.core.config import get_settings
from src.core.enums import Environment

if TYPE_CHECKING:
    from src.application.commands.handlers.import_statement_handler import (
        ImportStatementHandler,
    )
    from src.domain.protocols import (
        LoggerProtocol,
        TransactionCreatorProtocol,
        TransactionRepository,
    )
    from src.infrastructure.persistence.in_memory_transaction_store import (
        InMemoryTransactionStore,
    )


# ============================================================================
# Logging (Application-Scoped)
# ============================================================================


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    - development/production: ConsoleAdapter (human-readable)
    - testing/ci: ConsoleAdapter (JSON)

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from src.infrastructure.logging.console_adapter import ConsoleAdapter

    settings = get_settings()
    use_json = settings.environment in {Environment.TESTING, Environment.CI}
    return ConsoleAdapter(use_json=use_json, level=settings.log_level)


# ============================================================================
# Persistence (Application-Scoped)
# ============================================================================


@lru_cache()
def get_transaction_store() -> "InMemoryTransactionStore":
    """Return the process-local transaction store.

    Used when no external persistence collaborator is supplied (local runs,
    dry-run previews). It implements both the repository and the creator ports.
    """
    from src.infrastructure.persistence.in_memory_transaction_store import (
        InMemoryTransactionStore,
    )

    return InMemoryTransactionStore()


# ============================================================================
# Handlers (Request-Scoped)
# ============================================================================


def get_import_statement_handler(
    repository: "TransactionRepository | None" = None,
    creator: "TransactionCreatorProtocol | None" = None,
) -> "ImportStatementHandler":
    """Build an ImportStatementHandler.

    Args:
        repository: Duplicate-lookup port. Defaults to the in-memory store.
        creator: Transaction creation port. Defaults to the in-memory store.

    Returns:
        ImportStatementHandler wired with the settings and logger singletons.
    """
    from src.application.commands.handlers.import_statement_handler import (
        ImportStatementHandler,
    )
    from src.infrastructure.importers import CsvStatementParser, OfxStatementParser

    store = get_transaction_store()
    return ImportStatementHandler(
        transaction_repo=repository if repository is not None else store,
        transaction_creator=creator if creator is not None else store,
        logger=get_logger(),
        settings=get_settings(),
        csv_parser=CsvStatementParser(),
        ofx_parser=OfxStatementParser(),
    )
