"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
import datetime
from typing import Any, Dict, List, Literal, Optional


class FiscalYearResponse(BaseModel):
    """Response for GET /v1/fiscal-year"""

    fiscal_year: str
    assessment_year: str
    start_date: datetime.date
    end_date: datetime.date


class FiscalYearsResponse(BaseModel):
    """Response for GET /v1/fiscal-years"""

    current: str
    supported: List[str]


class TaxRequest(BaseModel):
    """Request body for POST /v1/tax/calculate"""

    total_income: float = Field(..., description="Total income for the fiscal year")
    total_deductible_expenses: float = Field(0, description="Sum of deductible expenses")
    taxpayer_category: Optional[str] = Field(None, description="general, female, senior_citizen, ...")
    fiscal_year: Optional[str] = Field(None, description="Income year label, e.g. 2024-2025")


class BreakdownRowSchema(BaseModel):
    """Single slab line in a tax computation"""

    label: str
    amount: float
    rate: float
    tax: float


class TaxResponse(BaseModel):
    """Response for POST /v1/tax/calculate"""

    fiscal_year: str
    assessment_year: str
    total_income: float
    total_deductible_expenses: float
    taxable_income: float
    taxpayer_category: str
    tax_free_threshold: int
    tax_payable: int
    breakdown: List[BreakdownRowSchema]


class IncomeItem(BaseModel):
    """Stored income record"""

    amount: float = Field(..., ge=0)
    date: datetime.date
    source: str = Field(..., min_length=1)
    description: str = ""


class ExpenseItem(BaseModel):
    """Stored expense record"""

    amount: float = Field(..., ge=0)
    date: datetime.date
    category: str = "Uncategorized"
    description: str = ""
    is_deductible: bool = True


class TaxSummaryRequest(BaseModel):
    """Request body for POST /v1/tax/summary"""

    incomes: List[IncomeItem] = Field(default_factory=list)
    expenses: List[ExpenseItem] = Field(default_factory=list)
    taxpayer_category: Optional[str] = None
    fiscal_year: Optional[str] = None


class SummarySchema(BaseModel):
    """Aggregated totals for one fiscal year"""

    fiscal_year: Optional[str]
    total_income: float
    total_expenses: float
    total_deductible_expenses: float
    profit: float
    expense_breakdown: Dict[str, float]


class TaxSummaryResponse(BaseModel):
    """Response for POST /v1/tax/summary"""

    summary: SummarySchema
    tax: TaxResponse


class ClassifyRequest(BaseModel):
    """Request body for POST /v1/classify"""

    description: str = Field(..., description="Short expense description")
    oracle_output: Optional[Any] = Field(None, description="Raw or decoded JSON answer from a generative model")


class ClassifyResponse(BaseModel):
    """Response for POST /v1/classify"""

    category: str
    is_deductible: bool
    engine: str


class ParseRequest(BaseModel):
    """Request body for POST /v1/parse"""

    text: str = Field(..., description="Free-text financial statement")
    today: Optional[datetime.date] = Field(None, description="Date given to every parsed record")
    oracle_output: Optional[Any] = Field(None, description="Raw or decoded JSON answer from a generative model")


class ParsedRecordSchema(BaseModel):
    """Single record extracted from a statement"""

    type: Literal["income", "expense"]
    amount: float
    source: Optional[str] = None
    category: Optional[str] = None
    description: str
    date: datetime.date


class ParseResponse(BaseModel):
    """Response for POST /v1/parse"""

    records: List[ParsedRecordSchema]
    engine: str


class ExpenseCompletionRequest(BaseModel):
    """Request body for POST /v1/expenses/complete"""

    description: Optional[str] = None
    category: Optional[str] = None
    is_deductible: Optional[bool] = None


class ExpenseCompletionResponse(BaseModel):
    """Response for POST /v1/expenses/complete"""

    category: str
    is_deductible: bool
