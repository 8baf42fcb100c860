"""ImportStatement command handler.

Imports a bank statement (CSV or OFX/QFX) into the transaction ledger.

Architecture:
    - Application layer handler
    - Orchestrates: validate -> resolve format -> parse -> normalize ->
      detect duplicates -> create
    - Row problems become ImportIssue values; only request/document problems
      fail the whole import

Flow:
    1. Validate the command (time zone, responsibilities, category fallback, ...)
    2. Resolve the statement format
    3. Parse the statement (CSV or OFX)
    4. Seed the tally with parser issues
    5. For each entry, in order:
       a. Ignore-listed description -> CONFIGURATION_REJECTED issue
       b. Normalization failure -> PARSING_ERROR issue
       c. Suspected duplicate under SKIP -> DUPLICATE_SKIPPED issue
       d. Dry-run -> counted only
       e. Otherwise create via the transaction creator
    6. Return ImportResult
"""

from zoneinfo import ZoneInfo

from src.application.commands.import_commands import ImportStatement
from src.application.dtos import ImportResult
from src.application.services.duplicate_detector import DuplicateDetector
from src.application.services.entry_normalizer import (
    NormalizedMappings,
    normalize_entry,
    normalize_key,
)
from src.application.services.format_resolver import resolve_statement_format
from src.application.services.import_tally import ImportTally
from src.core.config import Settings
from src.core.enums import ErrorCode
from src.core.errors import ValidationError
from src.core.result import Failure, Result, Success
from src.core.validation import (
    validate_max_items,
    validate_not_empty,
    validate_percentage_total,
    validate_single_character,
    validate_timezone,
)
from src.domain.enums import DuplicateStrategy, ImportIssueType, StatementFormat
from src.domain.errors import StatementImportError
from src.domain.protocols import (
    CsvStatementParserProtocol,
    LoggerProtocol,
    OfxStatementParserProtocol,
    ParsedEntry,
    StatementParseOutcome,
    TransactionCreatorProtocol,
    TransactionRepository,
)
from src.domain.value_objects import CsvConfiguration, ImportIssue


class ImportStatementMessage:
    """Issue messages for policy skips."""

    DUPLICATE = "Transaction already exists"
    IGNORED = "Description is in the ignore list"
    NO_CATEGORY = "A default category or category mappings are required"


class ImportStatementHandler:
    """Handler for ImportStatement command.

    Dependencies (injected via constructor):
        - TransactionRepository: Duplicate lookups
        - TransactionCreatorProtocol: Creates each accepted transaction
        - LoggerProtocol: Structured logging
        - Settings: Import limits and logging cadence
        - CSV and OFX statement parsers
    """

    def __init__(
        self,
        transaction_repo: TransactionRepository,
        transaction_creator: TransactionCreatorProtocol,
        logger: LoggerProtocol,
        settings: Settings,
        csv_parser: CsvStatementParserProtocol,
        ofx_parser: OfxStatementParserProtocol,
    ) -> None:
        """Initialize handler with dependencies.

        Args:
            transaction_repo: Repository consulted for duplicates.
            transaction_creator: Collaborator that persists drafts.
            logger: Structured logger.
            settings: Application settings.
            csv_parser: CSV grammar.
            ofx_parser: OFX grammar.
        """
        self._duplicate_detector = DuplicateDetector(transaction_repo)
        self._transaction_creator = transaction_creator
        self._logger = logger
        self._settings = settings
        self._csv_parser = csv_parser
        self._ofx_parser = ofx_parser

    async def handle(
        self, command: ImportStatement
    ) -> Result[ImportResult, StatementImportError]:
        """Handle ImportStatement command.

        Args:
            command: ImportStatement command with file data.

        Returns:
            Success(ImportResult): Import finished (possibly with issues).
            Failure(StatementImportError): Invalid request or unreadable file.
        """
        log = self._logger.bind(
            user_id=str(command.user_id),
            file_name=command.file_name,
            dry_run=command.dry_run,
        )

        # 1. Validate request
        zone_result = self._validate_command(command)
        if isinstance(zone_result, Failure):
            log.warning(
                "statement_import_rejected",
                error_code=zone_result.error.code.value,
                reason=zone_result.error.message,
            )
            return zone_result
        zone = zone_result.value

        # 2. Resolve format
        format_result = resolve_statement_format(
            command.format, command.file_name, command.content_type
        )
        if isinstance(format_result, Failure):
            log.warning(
                "statement_import_rejected",
                error_code=format_result.error.code.value,
                reason=format_result.error.message,
            )
            return format_result
        statement_format = format_result.value

        log.info(
            "statement_import_started",
            format=statement_format.value,
            file_size=len(command.file_content),
        )

        # 3. Parse
        parse_result = self._parse(command, statement_format, zone)
        if isinstance(parse_result, Failure):
            log.warning(
                "statement_import_failed",
                error_code=parse_result.error.code.value,
                reason=parse_result.error.message,
            )
            return parse_result
        outcome = parse_result.value

        # 4-5. Process entries
        tally = ImportTally.seeded(outcome.issues)
        mappings = NormalizedMappings.from_command(command)
        ignored = {normalize_key(d) for d in command.ignore_descriptions} - {""}
        interval = self._settings.import_progress_log_interval

        for position, entry in enumerate(outcome.entries, start=1):
            tally = await self._process_entry(
                entry, command, mappings, ignored, zone, tally, log
            )
            if position % interval == 0:
                log.info(
                    "statement_import_progress",
                    entries_done=position,
                    total_entries=len(outcome.entries),
                )

        # 6. Result
        result = tally.to_result(
            dry_run=command.dry_run, total_entries=len(outcome.entries)
        )
        log.info(
            "statement_import_completed",
            format=statement_format.value,
            total_entries=result.total_entries,
            processed_entries=result.processed_entries,
            created_transactions=result.created_transactions,
            duplicate_entries=result.duplicate_entries,
            issue_count=len(result.issues),
        )
        return Success(value=result)

    async def _process_entry(
        self,
        entry: ParsedEntry,
        command: ImportStatement,
        mappings: NormalizedMappings,
        ignored: set[str],
        zone: ZoneInfo,
        tally: ImportTally,
        log: LoggerProtocol,
    ) -> ImportTally:
        """Run one entry through the pipeline and return the updated tally."""
        if normalize_key(entry.description) in ignored:
            return tally.with_issue(
                ImportIssue(
                    line_number=entry.line_number,
                    message=ImportStatementMessage.IGNORED,
                    issue_type=ImportIssueType.CONFIGURATION_REJECTED,
                    external_reference=entry.external_id,
                )
            )

        draft_result = normalize_entry(entry, command, mappings)
        if isinstance(draft_result, Failure):
            log.debug(
                "statement_entry_rejected",
                line_number=entry.line_number,
                reason=draft_result.error,
            )
            return tally.with_issue(
                ImportIssue.parsing_error(
                    entry.line_number, draft_result.error, entry.external_id
                )
            )
        draft = draft_result.value
        tally = tally.with_processed()

        if command.duplicate_strategy == DuplicateStrategy.SKIP and (
            tally.seen(draft)
            or await self._duplicate_detector.is_duplicate(draft, zone)
        ):
            return tally.with_duplicate(
                ImportIssue(
                    line_number=entry.line_number,
                    message=ImportStatementMessage.DUPLICATE,
                    issue_type=ImportIssueType.DUPLICATE_SKIPPED,
                    external_reference=entry.external_id,
                )
            )

        if command.dry_run:
            return tally.with_accepted(draft)

        try:
            created = await self._transaction_creator.create(draft)
        except Exception as e:
            log.error(
                "statement_entry_create_failed",
                error=e,
                line_number=entry.line_number,
            )
            return tally.with_issue(
                ImportIssue.parsing_error(entry.line_number, str(e), entry.external_id)
            )

        if isinstance(created, Failure):
            log.debug(
                "statement_entry_create_rejected",
                line_number=entry.line_number,
                reason=created.error.message,
            )
            return tally.with_issue(
                ImportIssue.parsing_error(
                    entry.line_number, created.error.message, entry.external_id
                )
            )
        return tally.with_created(draft, created.value)

    def _parse(
        self,
        command: ImportStatement,
        statement_format: StatementFormat,
        zone: ZoneInfo,
    ) -> Result[StatementParseOutcome, StatementImportError]:
        if statement_format == StatementFormat.OFX:
            return self._ofx_parser.parse(command.file_content, zone, command.file_name)

        config_result = self._validate_csv_configuration(command.csv)
        if isinstance(config_result, Failure):
            return Failure(error=self._to_import_error(config_result.error, command))
        return self._csv_parser.parse(
            command.file_content, config_result.value, zone, command.file_name
        )

    def _validate_command(
        self, command: ImportStatement
    ) -> Result[ZoneInfo, StatementImportError]:
        """Request-level checks that do not depend on the statement format."""
        zone_result = validate_timezone(command.timezone)
        if isinstance(zone_result, Failure):
            return Failure(error=self._to_import_error(zone_result.error, command))

        checks = (
            validate_percentage_total(
                (r.percentage for r in command.responsibilities), "responsibilities"
            ),
            validate_max_items(
                command.ignore_descriptions,
                self._settings.import_max_ignore_descriptions,
                "ignore_descriptions",
            ),
        )
        for check in checks:
            if isinstance(check, Failure):
                return Failure(error=self._to_import_error(check.error, command))

        if command.default_category_id is None and not any(
            normalize_key(k) for k in command.category_mappings
        ):
            return Failure(
                error=StatementImportError(
                    code=ErrorCode.IMPORT_CONFIGURATION_INVALID,
                    message=ImportStatementMessage.NO_CATEGORY,
                    file_name=command.file_name,
                    details={"field": "default_category_id"},
                )
            )

        return Success(value=zone_result.value)

    def _validate_csv_configuration(
        self, config: CsvConfiguration | None
    ) -> Result[CsvConfiguration, ValidationError]:
        if config is None:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.IMPORT_CONFIGURATION_INVALID,
                    message="CSV configuration is required",
                    field="csv",
                )
            )

        checks = (
            validate_single_character(config.delimiter, "csv.delimiter", required=True),
            validate_single_character(config.decimal_separator, "csv.decimal_separator"),
            validate_single_character(
                config.grouping_separator, "csv.grouping_separator"
            ),
            validate_not_empty(config.date_patterns, "csv.date_patterns"),
        )
        for check in checks:
            if isinstance(check, Failure):
                return check
        return Success(value=config)

    @staticmethod
    def _to_import_error(
        error: ValidationError, command: ImportStatement
    ) -> StatementImportError:
        return StatementImportError(
            code=ErrorCode.IMPORT_CONFIGURATION_INVALID,
            message=error.message,
            file_name=command.file_name,
            details={"field": error.field or "", "reason": error.code.value},
        )
