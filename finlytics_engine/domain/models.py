"""Domain models - immutable dataclasses produced fresh on every call"""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Mapping, Optional, Tuple


@dataclass(frozen=True)
class TaxSlab:
    """Progressive band: width above the previous band, taxed at rate"""

    width: Optional[int]  # None = unbounded terminal band
    rate: float


@dataclass(frozen=True)
class TaxSlabConfig:
    """Slab table plus tax-free thresholds for one fiscal year"""

    thresholds: Mapping[str, int]
    slabs: Tuple[TaxSlab, ...]
    minimum_tax: int


@dataclass(frozen=True)
class BreakdownRow:
    """One line of a tax computation"""

    label: str
    amount: float
    rate: float
    tax: float


@dataclass(frozen=True)
class TaxResult:
    """Output of the slab engine"""

    fiscal_year: str
    assessment_year: str
    total_income: float
    total_deductible_expenses: float
    taxable_income: float
    taxpayer_category: str
    tax_free_threshold: int
    tax_payable: int
    breakdown: List[BreakdownRow]


@dataclass(frozen=True)
class ClassificationResult:
    """Expense category and whether it is deductible"""

    category: str
    is_deductible: bool


@dataclass(frozen=True)
class ParsedRecord:
    """Income or expense record extracted from free text"""

    type: str  # "income" or "expense"
    amount: float
    description: str
    date: str  # ISO date
    source: Optional[str] = None  # income only
    category: Optional[str] = None  # expense only


@dataclass(frozen=True)
class IncomeEntry:
    """Income record as stored by the surrounding tracker"""

    amount: float
    date: date
    source: str
    description: str = ""


@dataclass(frozen=True)
class ExpenseEntry:
    """Expense record as stored by the surrounding tracker"""

    amount: float
    date: date
    category: str
    description: str = ""
    is_deductible: bool = True


@dataclass(frozen=True)
class FinancialSummary:
    """Aggregated totals for one fiscal year"""

    fiscal_year: Optional[str]
    total_income: float
    total_expenses: float
    total_deductible_expenses: float
    profit: float
    expense_breakdown: Dict[str, float] = field(default_factory=dict)
