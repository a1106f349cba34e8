"""Integration tests for API endpoints"""

import pytest
from fastapi.testclient import TestClient
from finlytics_engine.api.dependencies import get_settings
from finlytics_engine.config import Settings


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert "X-Request-ID" in response.headers


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    client.post("/v1/tax/calculate", json={"total_income": 500000, "total_deductible_expenses": 40000})

    response = client.get("/metrics")
    assert response.status_code == 200
    assert "finlytics_tax_calculations_total" in response.text


def test_fiscal_year_for_date(client: TestClient):
    """Test GET /v1/fiscal-year resolves a date"""
    response = client.get("/v1/fiscal-year", params={"on": "2025-01-15"})

    assert response.status_code == 200
    assert response.json() == {
        "fiscal_year": "2024-2025",
        "assessment_year": "2025-2026",
        "start_date": "2024-07-01",
        "end_date": "2025-06-30",
    }


def test_fiscal_year_by_label(client: TestClient):
    """Test GET /v1/fiscal-year/{label} with valid and malformed labels"""
    assert client.get("/v1/fiscal-year/2023-2024").json()["assessment_year"] == "2024-2025"
    assert client.get("/v1/fiscal-year/2024-2026").status_code == 422


def test_fiscal_years_listing(client: TestClient):
    """Test GET /v1/fiscal-years"""
    data = client.get("/v1/fiscal-years").json()

    assert "2024-2025" in data["supported"]
    assert data["current"]


def test_tax_calculate(client: TestClient):
    """Test POST /v1/tax/calculate reference scenario"""
    response = client.post(
        "/v1/tax/calculate",
        json={
            "total_income": 500000,
            "total_deductible_expenses": 40000,
            "taxpayer_category": "general",
            "fiscal_year": "2024-2025",
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["taxable_income"] == 460000
    assert data["tax_payable"] == 6000
    assert data["assessment_year"] == "2025-2026"
    assert [row["label"] for row in data["breakdown"]] == ["First 350000", "Next 100000", "Next 300000"]


def test_tax_calculate_defaults(client: TestClient):
    """Test missing category and year use configured defaults"""
    data = client.post("/v1/tax/calculate", json={"total_income": 300000}).json()

    assert data["fiscal_year"] == "2024-2025"
    assert data["taxpayer_category"] == "general"
    assert data["tax_payable"] == 0


def test_tax_calculate_invalid_year(client: TestClient):
    """Test malformed fiscal year maps to 422"""
    response = client.post(
        "/v1/tax/calculate",
        json={"total_income": 500000, "fiscal_year": "abcd-abcd"},
    )
    assert response.status_code == 422

    response = client.post(
        "/v1/tax/calculate",
        json={"total_income": 500000, "fiscal_year": "2024-2025\n"},
    )
    assert response.status_code == 422


def test_tax_summary(client: TestClient):
    """Test POST /v1/tax/summary aggregates records before computing tax"""
    response = client.post(
        "/v1/tax/summary",
        json={
            "fiscal_year": "2024-2025",
            "taxpayer_category": "general",
            "incomes": [
                {"amount": 500000, "date": "2024-09-01", "source": "Client A"},
                {"amount": 100000, "date": "2025-08-01", "source": "Next year"},
            ],
            "expenses": [
                {"amount": 40000, "date": "2024-10-01", "category": "Rent"},
                {"amount": 9000, "date": "2024-11-01", "category": "Other", "is_deductible": False},
            ],
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["summary"]["total_income"] == 500000
    assert data["summary"]["total_expenses"] == 49000
    assert data["summary"]["expense_breakdown"] == {"Rent": 40000, "Other": 9000}
    assert data["tax"]["tax_payable"] == 6000


def test_classify_rules(client: TestClient):
    """Test POST /v1/classify without an oracle answer"""
    response = client.post("/v1/classify", json={"description": "Paid electricity bill for office"})

    assert response.status_code == 200
    assert response.json() == {"category": "Utilities", "is_deductible": True, "engine": "rules"}


def test_classify_oracle_answer(client: TestClient):
    """Test a valid oracle answer preempts the rules and an invalid one does not"""
    valid = client.post(
        "/v1/classify",
        json={"description": "court fees", "oracle_output": '```json\n{"category": "Legal", "isDeductible": false}\n```'},
    ).json()
    assert valid == {"category": "Legal", "is_deductible": False, "engine": "oracle"}

    invalid = client.post(
        "/v1/classify",
        json={"description": "court fees", "oracle_output": "AI service unavailable"},
    ).json()
    assert invalid == {"category": "Legal", "is_deductible": True, "engine": "rules"}


def test_classify_oracle_disabled(client: TestClient):
    """Test oracle answers are ignored when the oracle is disabled"""
    client.app.dependency_overrides[get_settings] = lambda: Settings(_env_file=None, oracle_enabled=False)

    data = client.post(
        "/v1/classify",
        json={"description": "office rent", "oracle_output": {"category": "Legal", "isDeductible": True}},
    ).json()

    assert data["engine"] == "rules"
    assert data["category"] == "Rent"


def test_parse_multiple(client: TestClient):
    """Test POST /v1/parse with several items"""
    response = client.post(
        "/v1/parse",
        json={"text": "salary 2000, bill 1500, transportation 1000", "today": "2025-01-15"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["engine"] == "rules"
    assert [r["category"] for r in data["records"]] == ["Salary", "Utilities", "Transport"]
    assert all(r["date"] == "2025-01-15" for r in data["records"])


def test_parse_income(client: TestClient):
    """Test POST /v1/parse income record"""
    data = client.post("/v1/parse", json={"text": "received 50000 from client", "today": "2025-01-15"}).json()

    assert data["records"] == [
        {
            "type": "income",
            "amount": 50000,
            "source": "received 50000 from client",
            "category": None,
            "description": "received 50000 from client",
            "date": "2025-01-15",
        }
    ]


def test_parse_empty_text(client: TestClient):
    """Test nothing parsed answers with an empty list"""
    data = client.post("/v1/parse", json={"text": " , "}).json()
    assert data == {"records": [], "engine": "rules"}


def test_parse_oracle_answer(client: TestClient):
    """Test valid oracle records are returned as-is"""
    data = client.post(
        "/v1/parse",
        json={
            "text": "paid salary 20000",
            "today": "2025-01-15",
            "oracle_output": {"type": "expense", "amount": 20000, "category": "Salary", "description": "paid salary"},
        },
    ).json()

    assert data["engine"] == "oracle"
    assert data["records"][0]["description"] == "paid salary"
    assert data["records"][0]["date"] == "2025-01-15"


@pytest.mark.parametrize(
    "body,expected",
    [
        ({"description": "Electricity bill"}, {"category": "Utilities", "is_deductible": True}),
        ({"description": "Electricity bill", "is_deductible": False}, {"category": "Utilities", "is_deductible": False}),
        ({}, {"category": "Uncategorized", "is_deductible": True}),
    ],
)
def test_complete_expense(client: TestClient, body, expected):
    """Test POST /v1/expenses/complete"""
    response = client.post("/v1/expenses/complete", json=body)

    assert response.status_code == 200
    assert response.json() == expected
