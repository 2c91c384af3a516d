"""Shared pytest fixtures for sheetledger tests."""

import io
import os
import tempfile

import pytest
from openpyxl import Workbook

from sheetledger.database.factories import create_sqlite_database
from sheetledger.domain.classification import (
    CategoryService,
    ClassificationService,
    KeywordFilterService,
)
from sheetledger.domain.column_mapping import ColumnMappingService
from sheetledger.domain.ingestion import IngestionService
from sheetledger.domain.ledger import LedgerService
from sheetledger.domain.reconciliation import ReconciliationService
from sheetledger.domain.reports import ReportService
from sheetledger.domain.settlement import SettlementService


def build_xlsx(rows) -> bytes:
    """Build an in-memory xlsx workbook whose first sheet holds ``rows``."""
    workbook = Workbook()
    sheet = workbook.active
    for row in rows:
        sheet.append(list(row))
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def xlsx():
    """Return a builder turning a list of rows into xlsx bytes."""
    return build_xlsx


@pytest.fixture
def ingestion_service(temp_db):
    return IngestionService(temp_db)


@pytest.fixture
def reconciliation_service(temp_db):
    return ReconciliationService(temp_db)


@pytest.fixture
def settlement_service(temp_db):
    return SettlementService(temp_db)


@pytest.fixture
def ledger_service(temp_db):
    return LedgerService(temp_db)


@pytest.fixture
def classification_service(temp_db):
    return ClassificationService(temp_db)


@pytest.fixture
def category_service(temp_db):
    return CategoryService(temp_db)


@pytest.fixture
def keyword_filter_service(temp_db):
    return KeywordFilterService(temp_db)


@pytest.fixture
def mapping_service(temp_db):
    return ColumnMappingService(temp_db)


@pytest.fixture
def report_service(temp_db):
    return ReportService(temp_db)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
