"""Deterministic statement classifier - keyword rules used when no oracle answer is available"""

import logging
import re
from typing import List, Optional, Tuple

from finlytics_engine.domain.models import ClassificationResult, ParsedRecord
from finlytics_engine.utils.date_utils import DateLike, to_iso_or_today

logger = logging.getLogger(__name__)

EXPENSE_CATEGORIES = (
    "Rent",
    "Salary",
    "Utilities",
    "Marketing",
    "VAT",
    "Inventory",
    "Transport",
    "Maintenance",
    "Legal",
    "Equipment",
    "Other",
    "Uncategorized",
)

# Fallback labels differ between the two entry points; keep both as-is
CLASSIFY_FALLBACK = "Other"
PARSE_FALLBACK = "Uncategorized"

# Ordered, first match wins
CATEGORY_RULES: Tuple[Tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"salary|payroll|wage"), "Salary"),
    (re.compile(r"rent"), "Rent"),
    (re.compile(r"transport|taxi|bus|uber|travel"), "Transport"),
    (re.compile(r"bill|electric|water|utility|utilities"), "Utilities"),
    (re.compile(r"ad\b|advert|ads|marketing|promotion"), "Marketing"),
    (re.compile(r"purchase|tools|inventory|stock|suppl|buying"), "Inventory"),
    (re.compile(r"chair|table|desk|furnitur|computer|laptop|printer|equipment"), "Equipment"),
    (re.compile(r"maintenance|repair|service"), "Maintenance"),
    (re.compile(r"legal|lawyer|court"), "Legal"),
)

EXPENSE_KEYWORDS = re.compile(r"\b(paid|paid to|paid for|spent|gave|purchase|purchased)\b", re.IGNORECASE)
INCOME_KEYWORDS = re.compile(r"\b(received|got|earned|invoice from|paid by|income|revenue)\b", re.IGNORECASE)
AMOUNT_PATTERN = re.compile(r"[0-9]{1,3}(?:[0-9,]*)(?:\.[0-9]+)?")
FRAGMENT_SEPARATORS = re.compile(r",|\band\b|\n")


def match_category(text: str) -> Optional[str]:
    """First category whose keyword pattern matches the lower-cased text"""
    lowered = text.lower()
    for pattern, category in CATEGORY_RULES:
        if pattern.search(lowered):
            return category
    return None


def classify(description: str | None) -> ClassificationResult:
    """
    Categorise a short expense description.

    Every category is currently deductible, Legal included.
    """
    category = match_category(description or "") or CLASSIFY_FALLBACK
    return ClassificationResult(category=category, is_deductible=True)


def split_fragments(text: str) -> List[str]:
    """Split on commas, the word 'and' or newlines; trimmed, empties dropped"""
    return [part.strip() for part in FRAGMENT_SEPARATORS.split(text) if part.strip()]


def extract_amount(fragment: str) -> float:
    """First number in the fragment with thousands separators removed, 0 if none"""
    match = AMOUNT_PATTERN.search(fragment)
    if not match:
        return 0
    value = float(match.group(0).replace(",", ""))
    return int(value) if value.is_integer() else value


def is_income(fragment: str) -> bool:
    """Income only when an income keyword is present and no expense keyword is"""
    return bool(INCOME_KEYWORDS.search(fragment)) and not EXPENSE_KEYWORDS.search(fragment)


def parse_fragment(fragment: str, today: str) -> ParsedRecord:
    """Structured record for one statement fragment"""
    amount = extract_amount(fragment)
    if is_income(fragment):
        return ParsedRecord(type="income", amount=amount, source=fragment, description=fragment, date=today)

    category = match_category(fragment) or PARSE_FALLBACK
    return ParsedRecord(type="expense", amount=amount, category=category, description=fragment, date=today)


def parse_statement(text: str | None, today: DateLike | None = None) -> ParsedRecord | List[ParsedRecord] | None:
    """
    Parse free text into income/expense records.

    Dates inside the text are not extracted; every record is dated `today`,
    or the current date when `today` is missing or not a recognisable date.

    Returns:
        A single record for one fragment, a list (input order) for several,
        None when the text holds no fragments.

    Example:
        "salary 2000, bill 1500, transportation 1000"
        → three expenses: Salary, Utilities, Transport
    """
    fragments = split_fragments(text or "")
    if not fragments:
        logger.debug("Nothing to parse in statement")
        return None

    day = to_iso_or_today(today)
    records = [parse_fragment(fragment, day) for fragment in fragments]
    return records[0] if len(records) == 1 else records
