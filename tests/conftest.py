"""Pytest configuration and shared fixtures.

Provides:
1. Marker registration (unit, integration)
2. Settings pinned to the testing environment
3. Mock logger and in-memory persistence for handler tests
4. Statement builders (CSV bytes, OFX documents)
"""

from unittest.mock import Mock
from uuid import UUID

import pytest
from uuid_extensions import uuid7

from src.core.config import Settings, get_settings
from src.core.enums import Environment
from src.infrastructure.persistence.in_memory_transaction_store import (
    InMemoryTransactionStore,
)

# Configure pytest-asyncio
pytest_plugins = ("pytest_asyncio",)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: fast tests without I/O")
    config.addinivalue_line(
        "markers", "integration: tests wiring several real components together"
    )


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Reset cached settings so environment overrides never leak between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def test_settings() -> Settings:
    """Settings for the testing environment."""
    return Settings(
        environment=Environment.TESTING,
        import_default_timezone="UTC",
        import_max_ignore_descriptions=5,
        import_progress_log_interval=2,
    )


@pytest.fixture
def mock_logger():
    """Provide a mock logger for testing.

    ``bind()`` returns the same mock so calls made through a bound logger
    can be asserted on the fixture itself.

    Usage:
        def test_something(mock_logger):
            handler = ImportStatementHandler(..., logger=mock_logger)
            ...
            mock_logger.info.assert_called()
    """
    logger = Mock()
    logger.info = Mock()
    logger.debug = Mock()
    logger.error = Mock()
    logger.warning = Mock()
    logger.bind = Mock(return_value=logger)
    logger.with_context = Mock(return_value=logger)
    return logger


@pytest.fixture
def user_id() -> UUID:
    return uuid7()


@pytest.fixture
def transaction_store() -> InMemoryTransactionStore:
    """Fresh in-memory store (repository + creator) per test."""
    return InMemoryTransactionStore()


def csv_bytes(*lines: str, encoding: str = "utf-8") -> bytes:
    """Join CSV lines with newlines and encode them."""
    return ("\n".join(lines) + "\n").encode(encoding)


def ofx_document(
    bank_transactions: str = "",
    credit_card_transactions: str = "",
) -> bytes:
    """Build an SGML OFX 1.02 document.

    Args:
        bank_transactions: <STMTTRN> blocks for a checking statement.
        credit_card_transactions: <STMTTRN> blocks for a credit card statement.
            Omitted when empty.
    """
    header = (
        "OFXHEADER:100\n"
        "DATA:OFXSGML\n"
        "VERSION:102\n"
        "SECURITY:NONE\n"
        "ENCODING:USASCII\n"
        "CHARSET:1252\n"
        "COMPRESSION:NONE\n"
        "OLDFILEUID:NONE\n"
        "NEWFILEUID:NONE\n"
        "\n"
    )
    signon = (
        "<SIGNONMSGSRSV1><SONRS>"
        "<STATUS><CODE>0<SEVERITY>INFO</STATUS>"
        "<DTSERVER>20240131120000<LANGUAGE>POR"
        "</SONRS></SIGNONMSGSRSV1>"
    )
    bank = (
        "<BANKMSGSRSV1><STMTTRNRS><TRNUID>1001"
        "<STATUS><CODE>0<SEVERITY>INFO</STATUS>"
        "<STMTRS><CURDEF>BRL"
        "<BANKACCTFROM><BANKID>0341<ACCTID>12345-6<ACCTTYPE>CHECKING</BANKACCTFROM>"
        "<BANKTRANLIST><DTSTART>20240101<DTEND>20240131"
        f"{bank_transactions}"
        "</BANKTRANLIST>"
        "<LEDGERBAL><BALAMT>1000.00<DTASOF>20240131</LEDGERBAL>"
        "</STMTRS></STMTTRNRS></BANKMSGSRSV1>"
    )
    credit_card = ""
    if credit_card_transactions:
        credit_card = (
            "<CREDITCARDMSGSRSV1><CCSTMTTRNRS><TRNUID>1002"
            "<STATUS><CODE>0<SEVERITY>INFO</STATUS>"
            "<CCSTMTRS><CURDEF>BRL"
            "<CCACCTFROM><ACCTID>4111111111111111</CCACCTFROM>"
            "<BANKTRANLIST><DTSTART>20240101<DTEND>20240131"
            f"{credit_card_transactions}"
            "</BANKTRANLIST>"
            "<LEDGERBAL><BALAMT>-250.00<DTASOF>20240131</LEDGERBAL>"
            "</CCSTMTRS></CCSTMTTRNRS></CREDITCARDMSGSRSV1>"
        )
    return (header + "<OFX>" + signon + bank + credit_card + "</OFX>\n").encode(
        "ascii"
    )


def stmttrn(
    trntype: str,
    posted: str,
    amount: str,
    fitid: str,
    name: str = "",
    memo: str = "",
) -> str:
    """Build one <STMTTRN> block."""
    block = (
        f"<STMTTRN><TRNTYPE>{trntype}<DTPOSTED>{posted}"
        f"<TRNAMT>{amount}<FITID>{fitid}"
    )
    if name:
        block += f"<NAME>{name}"
    if memo:
        block += f"<MEMO>{memo}"
    return block + "</STMTTRN>"
