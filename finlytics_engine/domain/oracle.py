"""
Oracle gate - accept a generative model's JSON answer or fall back to the rule engine.

The oracle is optional. Its raw text is decoded and validated against the same
schema the deterministic parser produces; anything else is Invalid and the
rule engine answers instead.
"""

import json
import logging
import re
from dataclasses import dataclass
from datetime import date
from numbers import Real
from typing import Any, List, Tuple, Union

from finlytics_engine.domain.classifier import (
    EXPENSE_CATEGORIES,
    PARSE_FALLBACK,
    classify,
    match_category,
    parse_statement,
)
from finlytics_engine.domain.exceptions import InvalidOracleOutputError
from finlytics_engine.domain.models import ClassificationResult, ParsedRecord
from finlytics_engine.utils.date_utils import DateLike, to_iso_or_today

logger = logging.getLogger(__name__)

ENGINE_ORACLE = "oracle"
ENGINE_RULES = "rules"

_CODE_FENCE = re.compile(r"```(?:json)?")


@dataclass(frozen=True)
class Valid:
    """Oracle answer that passed schema validation"""

    value: Any


@dataclass(frozen=True)
class Invalid:
    """Oracle answer that must be discarded"""

    reason: str


OracleResult = Union[Valid, Invalid]


def decode_oracle_text(text: str) -> Any:
    """Strip markdown code fences and decode JSON"""
    cleaned = _CODE_FENCE.sub("", text).strip()
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise InvalidOracleOutputError(f"Oracle returned invalid JSON: {e.msg}") from e


def _as_payload(output: Any) -> Any:
    # Raw model text still needs decoding; anything else is already structured
    return decode_oracle_text(output) if isinstance(output, str) else output


def _is_amount(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and value >= 0


def _optional_str(item: dict, key: str) -> str | None:
    value = item.get(key)
    if value is not None and not isinstance(value, str):
        raise InvalidOracleOutputError(f"'{key}' must be a string")
    return value


def _to_record(item: Any, today: str) -> ParsedRecord:
    if not isinstance(item, dict):
        raise InvalidOracleOutputError("Record must be a JSON object")

    record_type = item.get("type")
    if record_type not in ("income", "expense"):
        raise InvalidOracleOutputError(f"Unknown record type: {record_type!r}")
    if not _is_amount(item.get("amount")):
        raise InvalidOracleOutputError("'amount' must be a non-negative number")

    description = _optional_str(item, "description")
    if description is None:
        raise InvalidOracleOutputError("'description' is required")

    record_date = _optional_str(item, "date") or today
    try:
        date.fromisoformat(record_date)
    except ValueError as e:
        raise InvalidOracleOutputError(f"'date' is not an ISO date: {record_date!r}") from e

    # Same shape as the rule engine: income always has a source, expenses a known category
    if record_type == "income":
        source = _optional_str(item, "source") or description
        return ParsedRecord(type="income", amount=item["amount"], source=source, description=description, date=record_date)

    category = _optional_str(item, "category")
    if category is None:
        category = match_category(description) or PARSE_FALLBACK
    elif category not in EXPENSE_CATEGORIES:
        raise InvalidOracleOutputError(f"Unknown category: {category!r}")
    return ParsedRecord(type="expense", amount=item["amount"], category=category, description=description, date=record_date)


def validate_classification(output: Any) -> OracleResult:
    """Validate an oracle classification answer: {category, isDeductible}"""
    try:
        payload = _as_payload(output)
        if not isinstance(payload, dict):
            raise InvalidOracleOutputError("Classification must be a JSON object")

        category = payload.get("category")
        if category not in EXPENSE_CATEGORIES:
            raise InvalidOracleOutputError(f"Unknown category: {category!r}")

        is_deductible = payload.get("isDeductible", payload.get("is_deductible"))
        if not isinstance(is_deductible, bool):
            raise InvalidOracleOutputError("'isDeductible' must be a boolean")
    except InvalidOracleOutputError as e:
        return Invalid(reason=str(e))

    return Valid(ClassificationResult(category=category, is_deductible=is_deductible))


def validate_parsed(output: Any, today: DateLike | None = None) -> OracleResult:
    """Validate an oracle parse answer: one record object or a non-empty list of them"""
    day = to_iso_or_today(today)
    try:
        payload = _as_payload(output)
        if isinstance(payload, list):
            if not payload:
                raise InvalidOracleOutputError("Oracle returned an empty record list")
            records: ParsedRecord | List[ParsedRecord] = [_to_record(item, day) for item in payload]
            if len(records) == 1:
                records = records[0]
        else:
            records = _to_record(payload, day)
    except InvalidOracleOutputError as e:
        return Invalid(reason=str(e))

    return Valid(records)


def classify_with_fallback(description: str | None, oracle_output: Any = None) -> Tuple[ClassificationResult, str]:
    """
    Classification from the oracle when it answered validly, otherwise from the rules.

    Returns: (result, engine) where engine is "oracle" or "rules"
    """
    if oracle_output is not None:
        verdict = validate_classification(oracle_output)
        if isinstance(verdict, Valid):
            return verdict.value, ENGINE_ORACLE
        logger.warning("Oracle classification rejected, using rules", extra={"reason": verdict.reason})

    return classify(description), ENGINE_RULES


def parse_with_fallback(
    text: str | None,
    oracle_output: Any = None,
    today: DateLike | None = None,
) -> Tuple[ParsedRecord | List[ParsedRecord] | None, str]:
    """
    Parsed records from the oracle when it answered validly, otherwise from the rules.

    Returns: (records, engine) where engine is "oracle" or "rules"
    """
    if oracle_output is not None:
        verdict = validate_parsed(oracle_output, today)
        if isinstance(verdict, Valid):
            return verdict.value, ENGINE_ORACLE
        logger.warning("Oracle parse rejected, using rules", extra={"reason": verdict.reason})

    return parse_statement(text, today), ENGINE_RULES
