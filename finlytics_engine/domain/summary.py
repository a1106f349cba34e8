"""Aggregate stored income/expense records into the totals the tax engine consumes"""

from typing import Dict, Iterable, List

from finlytics_engine.domain.classifier import PARSE_FALLBACK, classify
from finlytics_engine.domain.fiscal_calendar import fiscal_year_bounds
from finlytics_engine.domain.models import ExpenseEntry, FinancialSummary, IncomeEntry, TaxResult
from finlytics_engine.domain.tax_slabs import DEFAULT_FISCAL_YEAR, calculate_tax
from finlytics_engine.utils.date_utils import to_date


def summarize(
    incomes: Iterable[IncomeEntry],
    expenses: Iterable[ExpenseEntry],
    fiscal_year: str | None = None,
) -> FinancialSummary:
    """
    Totals, profit and per-category expense breakdown.

    When a fiscal year is given, records dated outside it are ignored.

    Raises:
        InvalidFiscalYearError: fiscal_year is given but malformed
    """
    if fiscal_year is not None:
        first, last = fiscal_year_bounds(fiscal_year)
        incomes = [entry for entry in incomes if first <= to_date(entry.date) <= last]
        expenses = [entry for entry in expenses if first <= to_date(entry.date) <= last]
    else:
        incomes = list(incomes)
        expenses = list(expenses)

    total_income = sum(entry.amount for entry in incomes)
    total_expenses = sum(entry.amount for entry in expenses)
    total_deductible = sum(entry.amount for entry in expenses if entry.is_deductible)

    # dict keeps first-seen category order
    breakdown: Dict[str, float] = {}
    for entry in expenses:
        breakdown[entry.category] = breakdown.get(entry.category, 0) + entry.amount

    return FinancialSummary(
        fiscal_year=fiscal_year,
        total_income=total_income,
        total_expenses=total_expenses,
        total_deductible_expenses=total_deductible,
        profit=total_income - total_expenses,
        expense_breakdown=breakdown,
    )


def tax_for_records(
    incomes: List[IncomeEntry],
    expenses: List[ExpenseEntry],
    taxpayer_category: str | None = None,
    fiscal_year: str = DEFAULT_FISCAL_YEAR,
) -> tuple[FinancialSummary, TaxResult]:
    """Summarize the fiscal year's records, then tax all income less deductible expenses"""
    summary = summarize(incomes, expenses, fiscal_year)
    result = calculate_tax(
        summary.total_income,
        summary.total_deductible_expenses,
        taxpayer_category,
        fiscal_year,
    )
    return summary, result


def complete_expense(
    description: str | None,
    category: str | None = None,
    is_deductible: bool | None = None,
) -> tuple[str, bool]:
    """
    Fill in a missing category or deductibility flag from the description.

    Returns: (category, is_deductible)
    """
    if (category is None or is_deductible is None) and description:
        classification = classify(description)
        category = category or classification.category
        if is_deductible is None:
            is_deductible = classification.is_deductible

    return category or PARSE_FALLBACK, True if is_deductible is None else is_deductible
