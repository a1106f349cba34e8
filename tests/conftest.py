"""Pytest fixtures for testing"""

import pytest
from datetime import date
from fastapi.testclient import TestClient
from finlytics_engine.api.main import create_app
from finlytics_engine.api.dependencies import get_settings
from finlytics_engine.config import Settings
from finlytics_engine.domain.models import ExpenseEntry, IncomeEntry


@pytest.fixture
def app_settings() -> Settings:
    """Settings isolated from any local .env file"""
    return Settings(_env_file=None)


@pytest.fixture
def client(app_settings: Settings) -> TestClient:
    """Create FastAPI test client with test settings"""
    app = create_app()
    app.dependency_overrides[get_settings] = lambda: app_settings
    return TestClient(app)


@pytest.fixture
def sample_incomes() -> list[IncomeEntry]:
    """Income records spread across two fiscal years"""
    return [
        IncomeEntry(amount=300000, date=date(2024, 8, 15), source="Client A", description="Website project"),
        IncomeEntry(amount=200000, date=date(2025, 2, 1), source="Client B", description="Consulting"),
        # 2025-2026 fiscal year
        IncomeEntry(amount=999999, date=date(2025, 7, 1), source="Client C", description="Next year retainer"),
    ]


@pytest.fixture
def sample_expenses() -> list[ExpenseEntry]:
    """Expense records, one of them non-deductible"""
    return [
        ExpenseEntry(amount=25000, date=date(2024, 9, 1), category="Rent", description="Office rent"),
        ExpenseEntry(amount=10000, date=date(2024, 10, 5), category="Utilities", description="Electricity bill"),
        ExpenseEntry(amount=5000, date=date(2025, 3, 3), category="Rent", description="Storage rent"),
        ExpenseEntry(
            amount=8000,
            date=date(2025, 4, 20),
            category="Other",
            description="Personal dinner",
            is_deductible=False,
        ),
        # Previous fiscal year
        ExpenseEntry(amount=70000, date=date(2024, 6, 30), category="Equipment", description="Laptop"),
    ]
