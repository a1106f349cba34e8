"""GET /v1/fiscal-year - fiscal and assessment year resolution"""

import datetime
from typing import Optional
from fastapi import APIRouter, HTTPException

from finlytics_engine.api.v1.schemas import FiscalYearResponse, FiscalYearsResponse
from finlytics_engine.domain.exceptions import InvalidFiscalYearError
from finlytics_engine.domain.fiscal_calendar import assessment_year, fiscal_year_bounds, resolve_fiscal_year
from finlytics_engine.domain.tax_slabs import supported_fiscal_years

router = APIRouter()


def _describe(label: str) -> FiscalYearResponse:
    start_date, end_date = fiscal_year_bounds(label)
    return FiscalYearResponse(
        fiscal_year=label,
        assessment_year=assessment_year(label),
        start_date=start_date,
        end_date=end_date,
    )


@router.get("/fiscal-year", response_model=FiscalYearResponse)
def get_fiscal_year(on: Optional[datetime.date] = None):
    """Fiscal year containing a date (default: today)"""
    return _describe(resolve_fiscal_year(on))


@router.get("/fiscal-years", response_model=FiscalYearsResponse)
def list_fiscal_years():
    """Current fiscal year and the years with a registered tax configuration"""
    return FiscalYearsResponse(current=resolve_fiscal_year(), supported=supported_fiscal_years())


@router.get("/fiscal-year/{label}", response_model=FiscalYearResponse)
def get_fiscal_year_by_label(label: str):
    """Assessment year and date range for a fiscal year label"""
    try:
        return _describe(label)
    except InvalidFiscalYearError as e:
        raise HTTPException(status_code=422, detail=str(e))
