"""Unit tests for ImportStatementHandler.

Tests cover:
- CSV imports end to end (create, dry-run, duplicates, unknown enum values)
- Idempotence and dry-run equivalence
- Ignore-list, ALLOW policy and creation failures
- OFX imports through the handler
- Request-level failures (format, configuration, time zone, totals)
- Logging

Architecture:
    - Real CSV/OFX parsers (pure, no I/O)
    - InMemoryTransactionStore as repository and creator
    - Mock logger (bind returns itself)
"""

from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import AsyncMock, Mock

import pytest

from src.application.commands.handlers.import_statement_handler import (
    ImportStatementHandler,
    ImportStatementMessage,
)
from src.application.commands.import_commands import ImportStatement
from src.core.enums import ErrorCode
from src.core.errors import ValidationError
from src.core.result import Failure, Success
from src.domain.enums import (
    DuplicateStrategy,
    ImportIssueType,
    StatementFormat,
    TransactionSource,
    TransactionType,
)
from src.domain.errors import TransactionError
from src.domain.value_objects import CsvConfiguration, ResponsibilityAllocation
from src.infrastructure.importers import CsvStatementParser, OfxStatementParser
from tests.conftest import csv_bytes, ofx_document, stmttrn

GROCERIES = csv_bytes("date;description;amount", "01/01/2024;Groceries;-45,90")


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def csv_config() -> CsvConfiguration:
    return CsvConfiguration(delimiter=";", locale="pt-BR")


@pytest.fixture
def handler(transaction_store, mock_logger, test_settings) -> ImportStatementHandler:
    return ImportStatementHandler(
        transaction_repo=transaction_store,
        transaction_creator=transaction_store,
        logger=mock_logger,
        settings=test_settings,
        csv_parser=CsvStatementParser(),
        ofx_parser=OfxStatementParser(),
    )


@pytest.fixture
def make_command(user_id, csv_config):
    """Build ImportStatement commands with CSV defaults."""

    def _make(**overrides) -> ImportStatement:
        values = {
            "user_id": user_id,
            "file_content": GROCERIES,
            "file_name": "extrato.csv",
            "default_category_id": 5,
            "timezone": "UTC",
            "csv": csv_config,
        }
        values.update(overrides)
        return ImportStatement(**values)

    return _make


# =============================================================================
# CSV Imports
# =============================================================================


@pytest.mark.unit
class TestCsvImport:
    """Test CSV statements through the handler."""

    @pytest.mark.asyncio
    async def test_creates_transaction(self, handler, make_command, transaction_store):
        """Test a single pt-BR row becomes an EXPENSE of 45.90."""
        result = await handler.handle(make_command())

        assert isinstance(result, Success)
        summary = result.value
        assert summary.dry_run is False
        assert summary.total_entries == 1
        assert summary.processed_entries == 1
        assert summary.created_transactions == 1
        assert summary.issues == []
        transaction = summary.transactions[0]
        assert transaction.description == "Groceries"
        assert transaction.amount == Decimal("45.90")
        assert transaction.transaction_type == TransactionType.EXPENSE
        assert transaction.category_id == 5
        assert transaction.date == datetime(2024, 1, 1, tzinfo=UTC)
        assert len(transaction_store) == 1

    @pytest.mark.asyncio
    async def test_dry_run_creates_nothing(
        self, handler, make_command, transaction_store
    ):
        result = await handler.handle(make_command(dry_run=True))

        assert isinstance(result, Success)
        summary = result.value
        assert summary.dry_run is True
        assert summary.processed_entries == 1
        assert summary.created_transactions == 0
        assert summary.transactions == []
        assert len(transaction_store) == 0

    @pytest.mark.asyncio
    async def test_identical_rows_skip_second(self, handler, make_command):
        content = csv_bytes(
            "date;description;amount",
            "01/01/2024;Groceries;-45,90",
            "01/01/2024;Groceries;-45,90",
        )

        result = await handler.handle(make_command(file_content=content))

        assert isinstance(result, Success)
        summary = result.value
        assert summary.created_transactions == 1
        assert summary.duplicate_entries == 1
        assert summary.processed_entries == 2
        assert len(summary.issues) == 1
        issue = summary.issues[0]
        assert issue.line_number == 2
        assert issue.issue_type == ImportIssueType.DUPLICATE_SKIPPED
        assert issue.message == ImportStatementMessage.DUPLICATE

    @pytest.mark.asyncio
    async def test_unknown_type_value_is_row_issue(self, handler, make_command):
        content = csv_bytes(
            "date;description;amount;tipo",
            "01/01/2024;Groceries;-45,90;SOMETIMES",
            "02/01/2024;Salary;1000,00;income",
        )
        config = CsvConfiguration(delimiter=";", locale="pt-BR", type_column="tipo")

        result = await handler.handle(make_command(file_content=content, csv=config))

        assert isinstance(result, Success)
        summary = result.value
        assert summary.total_entries == 1
        assert summary.processed_entries == 1
        assert summary.created_transactions == 1
        assert len(summary.issues) == 1
        issue = summary.issues[0]
        assert issue.line_number == 1
        assert issue.issue_type == ImportIssueType.PARSING_ERROR
        assert "SOMETIMES" in issue.message

    @pytest.mark.asyncio
    async def test_allow_policy_creates_duplicates(self, handler, make_command):
        content = csv_bytes(
            "date;description;amount",
            "01/01/2024;Groceries;-45,90",
            "01/01/2024;Groceries;-45,90",
        )

        result = await handler.handle(
            make_command(
                file_content=content, duplicate_strategy=DuplicateStrategy.ALLOW
            )
        )

        assert isinstance(result, Success)
        assert result.value.created_transactions == 2
        assert result.value.duplicate_entries == 0

    @pytest.mark.asyncio
    async def test_ignored_description(self, handler, make_command):
        content = csv_bytes(
            "date;description;amount",
            "01/01/2024;Saldo anterior;100,00",
            "01/01/2024;Groceries;-45,90",
        )

        result = await handler.handle(
            make_command(file_content=content, ignore_descriptions=("SALDO ANTERIOR",))
        )

        assert isinstance(result, Success)
        summary = result.value
        assert summary.total_entries == 2
        assert summary.processed_entries == 1
        assert summary.created_transactions == 1
        issue = summary.issues[0]
        assert issue.line_number == 1
        assert issue.issue_type == ImportIssueType.CONFIGURATION_REJECTED
        assert issue.message == ImportStatementMessage.IGNORED

    @pytest.mark.asyncio
    async def test_parser_issues_come_first(self, handler, make_command):
        content = csv_bytes(
            "date;description;amount",
            "01/01/2024;Saldo anterior;100,00",
            "not a date;Groceries;-45,90",
        )

        result = await handler.handle(
            make_command(file_content=content, ignore_descriptions=("saldo anterior",))
        )

        assert isinstance(result, Success)
        assert [i.issue_type for i in result.value.issues] == [
            ImportIssueType.PARSING_ERROR,
            ImportIssueType.CONFIGURATION_REJECTED,
        ]

    @pytest.mark.asyncio
    async def test_responsibilities_copied(self, handler, make_command):
        allocations = (
            ResponsibilityAllocation(responsible_id=1, percentage=Decimal("60")),
            ResponsibilityAllocation(responsible_id=2, percentage=Decimal("40")),
        )

        result = await handler.handle(make_command(responsibilities=allocations))

        assert isinstance(result, Success)
        assert result.value.transactions[0].responsibilities == allocations


# =============================================================================
# Batch Properties
# =============================================================================


@pytest.mark.unit
class TestBatchProperties:
    """Test idempotence and dry-run equivalence."""

    @pytest.mark.asyncio
    async def test_second_run_creates_nothing(self, handler, make_command):
        content = csv_bytes(
            "date;description;amount",
            "01/01/2024;Groceries;-45,90",
            "02/01/2024;Pharmacy;-12,00",
        )

        first = await handler.handle(make_command(file_content=content))
        second = await handler.handle(make_command(file_content=content))

        assert isinstance(first, Success)
        assert isinstance(second, Success)
        assert first.value.created_transactions == 2
        assert second.value.created_transactions == 0
        assert second.value.duplicate_entries == 2

    @pytest.mark.asyncio
    async def test_dry_run_matches_real_run(
        self, make_command, mock_logger, test_settings, transaction_store
    ):
        content = csv_bytes(
            "date;description;amount",
            "01/01/2024;Groceries;-45,90",
            "01/01/2024;Groceries;-45,90",
            "bad;Broken;1,00",
            "03/01/2024;Refund;10,00",
        )
        creator = Mock()
        creator.create = AsyncMock(side_effect=transaction_store.create)
        handler = ImportStatementHandler(
            transaction_repo=transaction_store,
            transaction_creator=creator,
            logger=mock_logger,
            settings=test_settings,
            csv_parser=CsvStatementParser(),
            ofx_parser=OfxStatementParser(),
        )

        dry = await handler.handle(make_command(file_content=content, dry_run=True))
        creator.create.assert_not_awaited()
        real = await handler.handle(make_command(file_content=content))

        assert isinstance(dry, Success)
        assert isinstance(real, Success)
        for field_name in (
            "total_entries",
            "processed_entries",
            "duplicate_entries",
            "issues",
        ):
            assert getattr(dry.value, field_name) == getattr(real.value, field_name)
        assert dry.value.transactions == []
        assert len(real.value.transactions) == 2


# =============================================================================
# Creation Failures
# =============================================================================


@pytest.mark.unit
class TestCreationFailures:
    """Test failures reported by the transaction creator."""

    def _handler(self, creator, transaction_store, mock_logger, test_settings):
        return ImportStatementHandler(
            transaction_repo=transaction_store,
            transaction_creator=creator,
            logger=mock_logger,
            settings=test_settings,
            csv_parser=CsvStatementParser(),
            ofx_parser=OfxStatementParser(),
        )

    @pytest.mark.asyncio
    async def test_creator_failure_becomes_issue(
        self, make_command, transaction_store, mock_logger, test_settings
    ):
        creator = Mock()
        creator.create = AsyncMock(
            return_value=Failure(
                error=ValidationError(
                    code=ErrorCode.TRANSACTION_REJECTED,
                    message="Category does not belong to user",
                    field="category_id",
                )
            )
        )
        handler = self._handler(creator, transaction_store, mock_logger, test_settings)

        result = await handler.handle(make_command())

        assert isinstance(result, Success)
        summary = result.value
        assert summary.processed_entries == 1
        assert summary.created_transactions == 0
        assert summary.issues[0].issue_type == ImportIssueType.PARSING_ERROR
        assert summary.issues[0].message == "Category does not belong to user"

    @pytest.mark.asyncio
    async def test_creator_exception_does_not_abort_batch(
        self, make_command, transaction_store, mock_logger, test_settings
    ):
        content = csv_bytes(
            "date;description;amount",
            "01/01/2024;Groceries;-45,90",
            "02/01/2024;Pharmacy;-12,00",
        )
        creator = Mock()
        creator.create = AsyncMock(
            side_effect=_fail_first(RuntimeError("connection lost"), transaction_store)
        )
        handler = self._handler(creator, transaction_store, mock_logger, test_settings)

        result = await handler.handle(make_command(file_content=content))

        assert isinstance(result, Success)
        summary = result.value
        assert summary.created_transactions == 1
        assert summary.issues[0].line_number == 1
        assert summary.issues[0].message == "connection lost"
        mock_logger.error.assert_called_once()
        assert mock_logger.error.call_args.args[0] == "statement_entry_create_failed"


def _fail_first(error: Exception, store):
    """Side effect raising ``error`` on the first call, delegating afterwards."""
    calls = {"count": 0}

    async def _create(draft):
        calls["count"] += 1
        if calls["count"] == 1:
            raise error
        return await store.create(draft)

    return _create


# =============================================================================
# OFX Imports
# =============================================================================


@pytest.mark.unit
class TestOfxImport:
    """Test OFX statements through the handler."""

    @pytest.mark.asyncio
    async def test_imports_bank_and_card(self, handler, make_command):
        content = ofx_document(
            bank_transactions=stmttrn("CREDIT", "20240105", "1500.00", "B1", name="Salario"),
            credit_card_transactions=stmttrn(
                "DEBIT", "20240106", "-89.90", "C1", name="Restaurante"
            ),
        )

        result = await handler.handle(
            make_command(file_content=content, file_name="extrato.ofx", csv=None)
        )

        assert isinstance(result, Success)
        summary = result.value
        assert summary.created_transactions == 2
        salary, dinner = summary.transactions
        assert salary.transaction_type == TransactionType.INCOME
        assert salary.source == TransactionSource.BANK_TRANSACTION
        assert dinner.transaction_type == TransactionType.EXPENSE
        assert dinner.source == TransactionSource.CREDIT_CARD
        assert dinner.amount == Decimal("89.90")

    @pytest.mark.asyncio
    async def test_undated_transaction_reported_and_batch_continues(
        self, handler, make_command
    ):
        """Test an all-zero DTPOSTED becomes a missing-date issue."""
        content = ofx_document(
            bank_transactions=(
                stmttrn("DEBIT", "00000000", "-9.00", "UNDATED", name="Sem data")
                + stmttrn("CREDIT", "20240105", "1500.00", "B1", name="Salario")
            )
        )

        result = await handler.handle(
            make_command(file_content=content, file_name="extrato.ofx", csv=None)
        )

        assert isinstance(result, Success)
        summary = result.value
        assert summary.total_entries == 2
        assert summary.created_transactions == 1
        assert len(summary.issues) == 1
        issue = summary.issues[0]
        assert issue.line_number == 2
        assert issue.issue_type == ImportIssueType.PARSING_ERROR
        assert issue.message == TransactionError.MISSING_DATE
        assert issue.external_reference == "UNDATED"

    @pytest.mark.asyncio
    async def test_corrupt_document_fails_request(self, handler, make_command):
        result = await handler.handle(
            make_command(
                file_content=b"garbage",
                file_name=None,
                format=StatementFormat.OFX,
            )
        )

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.IMPORT_DOCUMENT_INVALID


# =============================================================================
# Request Failures
# =============================================================================


@pytest.mark.unit
class TestRequestFailures:
    """Test whole-request failures."""

    @pytest.mark.asyncio
    async def test_unresolvable_format(self, handler, make_command, mock_logger):
        result = await handler.handle(
            make_command(file_name="statement.pdf", content_type="application/pdf")
        )

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.IMPORT_FORMAT_UNRESOLVED
        assert mock_logger.warning.call_args.args[0] == "statement_import_rejected"

    @pytest.mark.asyncio
    async def test_csv_requires_configuration(self, handler, make_command):
        result = await handler.handle(make_command(csv=None))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.IMPORT_CONFIGURATION_INVALID
        assert result.error.details["field"] == "csv"

    @pytest.mark.asyncio
    async def test_missing_required_column(self, handler, make_command):
        content = csv_bytes("data;historico;valor", "01/01/2024;Groceries;-45,90")

        result = await handler.handle(make_command(file_content=content))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.IMPORT_COLUMN_MISSING

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "config",
        [
            CsvConfiguration(delimiter=";;", locale="pt-BR"),
            CsvConfiguration(delimiter="", locale="pt-BR"),
            CsvConfiguration(delimiter=";", locale="pt-BR", decimal_separator=",,"),
            CsvConfiguration(delimiter=";", locale="pt-BR", date_patterns=()),
        ],
    )
    async def test_invalid_csv_configuration(self, handler, make_command, config):
        result = await handler.handle(make_command(csv=config))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.IMPORT_CONFIGURATION_INVALID

    @pytest.mark.asyncio
    async def test_invalid_timezone(self, handler, make_command):
        result = await handler.handle(make_command(timezone="Mars/Olympus_Mons"))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.IMPORT_CONFIGURATION_INVALID
        assert result.error.details["field"] == "timezone"

    @pytest.mark.asyncio
    async def test_responsibilities_must_total_100(self, handler, make_command):
        allocations = (
            ResponsibilityAllocation(responsible_id=1, percentage=Decimal("60")),
            ResponsibilityAllocation(responsible_id=2, percentage=Decimal("30")),
        )

        result = await handler.handle(make_command(responsibilities=allocations))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.IMPORT_CONFIGURATION_INVALID
        assert "100" in result.error.message

    @pytest.mark.asyncio
    async def test_ignore_list_too_long(self, handler, make_command):
        ignored = tuple(f"desc {i}" for i in range(6))

        result = await handler.handle(make_command(ignore_descriptions=ignored))

        assert isinstance(result, Failure)
        assert result.error.details["field"] == "ignore_descriptions"

    @pytest.mark.asyncio
    async def test_category_fallback_required(self, handler, make_command):
        result = await handler.handle(make_command(default_category_id=None))

        assert isinstance(result, Failure)
        assert result.error.message == ImportStatementMessage.NO_CATEGORY

    @pytest.mark.asyncio
    async def test_mappings_replace_default_category(self, handler, make_command):
        content = csv_bytes(
            "date;description;amount;categoria",
            "01/01/2024;Groceries;-45,90;Mercado",
        )
        config = CsvConfiguration(
            delimiter=";", locale="pt-BR", category_column="categoria"
        )

        result = await handler.handle(
            make_command(
                file_content=content,
                csv=config,
                default_category_id=None,
                category_mappings={"mercado": 12},
            )
        )

        assert isinstance(result, Success)
        assert result.value.transactions[0].category_id == 12


# =============================================================================
# Logging
# =============================================================================


@pytest.mark.unit
class TestImportLogging:
    """Test structured log events."""

    @pytest.mark.asyncio
    async def test_logs_start_progress_and_completion(
        self, handler, make_command, mock_logger
    ):
        content = csv_bytes(
            "date;description;amount",
            "01/01/2024;A;-1,00",
            "02/01/2024;B;-2,00",
            "03/01/2024;C;-3,00",
        )

        await handler.handle(make_command(file_content=content))

        events = [c.args[0] for c in mock_logger.info.call_args_list]
        assert events[0] == "statement_import_started"
        assert events.count("statement_import_progress") == 1
        assert events[-1] == "statement_import_completed"
        mock_logger.bind.assert_called_once()
