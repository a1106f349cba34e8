"""Bangladesh fiscal calendar - fiscal year runs July 1 to June 30"""

import re
from datetime import date
from typing import Tuple

from finlytics_engine.domain.exceptions import InvalidFiscalYearError
from finlytics_engine.utils.date_utils import DateLike, to_date

FISCAL_YEAR_START_MONTH = 7
# ASCII digits only; use with fullmatch
_LABEL_PATTERN = re.compile(r"[0-9]{4}-[0-9]{4}")


def resolve_fiscal_year(on: DateLike | None = None) -> str:
    """
    Fiscal year label containing the given date (default: today).

    July onwards belongs to the year starting in the current calendar year,
    January to June to the year that started in the previous one.

    Example:
        2024-07-01 → "2024-2025"
        2025-06-30 → "2024-2025"
    """
    day = to_date(on)
    if day.month >= FISCAL_YEAR_START_MONTH:
        start = day.year
    else:
        start = day.year - 1
    return f"{start}-{start + 1}"


def is_valid_fiscal_year(label: object) -> bool:
    """True iff label is YYYY-YYYY and the second year follows the first"""
    if not isinstance(label, str) or not _LABEL_PATTERN.fullmatch(label):
        return False
    start, end = (int(part) for part in label.split("-"))
    return end == start + 1


def _split(label: str) -> Tuple[int, int]:
    if not is_valid_fiscal_year(label):
        raise InvalidFiscalYearError(label)
    start, end = label.split("-")
    return int(start), int(end)


def assessment_year(label: str) -> str:
    """
    Assessment year for an income year: both ends shifted forward by one.

    Raises:
        InvalidFiscalYearError: label fails the YYYY-YYYY / consecutive-year check
    """
    start, end = _split(label)
    return f"{start + 1}-{end + 1}"


def fiscal_year_bounds(label: str) -> Tuple[date, date]:
    """First and last day (inclusive) of a fiscal year"""
    start, end = _split(label)
    return date(start, FISCAL_YEAR_START_MONTH, 1), date(end, FISCAL_YEAR_START_MONTH - 1, 30)


def contains(label: str, on: DateLike) -> bool:
    """Whether a date falls inside the fiscal year"""
    first, last = fiscal_year_bounds(label)
    return first <= to_date(on) <= last
