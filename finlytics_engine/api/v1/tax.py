"""POST /v1/tax - progressive tax computation"""

import time
import logging
from dataclasses import asdict
from fastapi import APIRouter, Depends, HTTPException, Request

from finlytics_engine.api.dependencies import get_request_id, get_settings
from finlytics_engine.api.v1.schemas import TaxRequest, TaxResponse, TaxSummaryRequest, TaxSummaryResponse
from finlytics_engine.config import Settings
from finlytics_engine.domain.exceptions import InvalidFiscalYearError
from finlytics_engine.domain.models import ExpenseEntry, IncomeEntry, TaxResult
from finlytics_engine.domain.summary import tax_for_records
from finlytics_engine.domain.tax_slabs import calculate_tax
from finlytics_engine.infrastructure.observability.logging import log_tax_calculation
from finlytics_engine.infrastructure.observability.metrics import record_tax_calculation

router = APIRouter()


def _observe(request_id: str, result: TaxResult, start_time: float) -> None:
    duration_ms = (time.time() - start_time) * 1000
    record_tax_calculation(result.taxpayer_category, result.tax_payable)
    log_tax_calculation(
        request_id,
        result.fiscal_year,
        result.taxpayer_category,
        result.taxable_income,
        result.tax_payable,
        duration_ms,
    )


@router.post("/tax/calculate", response_model=TaxResponse)
def create_tax_calculation(
    request_body: TaxRequest,
    request: Request,
    config: Settings = Depends(get_settings),
):
    """
    Compute tax payable from aggregated totals.

    Missing taxpayer category and fiscal year fall back to the configured defaults.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        result = calculate_tax(
            request_body.total_income,
            request_body.total_deductible_expenses,
            request_body.taxpayer_category or config.default_taxpayer_category,
            request_body.fiscal_year or config.default_fiscal_year,
        )
    except InvalidFiscalYearError as e:
        logging.warning(f"Invalid fiscal year: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    _observe(request_id, result, start_time)
    return TaxResponse(**asdict(result))


@router.post("/tax/summary", response_model=TaxSummaryResponse)
def create_tax_summary(
    request_body: TaxSummaryRequest,
    request: Request,
    config: Settings = Depends(get_settings),
):
    """
    Aggregate raw income/expense records for a fiscal year and compute its tax.

    Only deductible expenses reduce taxable income; records dated outside the
    fiscal year are ignored.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    incomes = [IncomeEntry(**item.model_dump()) for item in request_body.incomes]
    expenses = [ExpenseEntry(**item.model_dump()) for item in request_body.expenses]

    try:
        summary, result = tax_for_records(
            incomes,
            expenses,
            request_body.taxpayer_category or config.default_taxpayer_category,
            request_body.fiscal_year or config.default_fiscal_year,
        )
    except InvalidFiscalYearError as e:
        logging.warning(f"Invalid fiscal year: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    _observe(request_id, result, start_time)
    return TaxSummaryResponse(summary=asdict(summary), tax=asdict(result))
