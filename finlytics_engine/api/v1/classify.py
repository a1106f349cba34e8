"""POST /v1/classify, /v1/parse - statement classification with oracle fallback"""

import time
from dataclasses import asdict
from fastapi import APIRouter, Depends, Request

from finlytics_engine.api.dependencies import get_request_id, get_settings
from finlytics_engine.api.v1.schemas import (
    ClassifyRequest,
    ClassifyResponse,
    ExpenseCompletionRequest,
    ExpenseCompletionResponse,
    ParseRequest,
    ParseResponse,
)
from finlytics_engine.config import Settings
from finlytics_engine.domain.oracle import classify_with_fallback, parse_with_fallback
from finlytics_engine.domain.summary import complete_expense
from finlytics_engine.infrastructure.observability.logging import log_classification
from finlytics_engine.infrastructure.observability.metrics import record_classification

router = APIRouter()


@router.post("/classify", response_model=ClassifyResponse)
def classify_description(
    request_body: ClassifyRequest,
    request: Request,
    config: Settings = Depends(get_settings),
):
    """
    Categorise an expense description.

    A valid oracle answer in the request wins; otherwise the keyword rules answer.
    """
    start_time = time.time()
    oracle_output = request_body.oracle_output if config.oracle_enabled else None

    result, engine = classify_with_fallback(request_body.description, oracle_output)

    record_classification(engine, [result.category], oracle_output is not None, "classify")
    log_classification(get_request_id(request), "classify", engine, 1, (time.time() - start_time) * 1000)

    return ClassifyResponse(category=result.category, is_deductible=result.is_deductible, engine=engine)


@router.post("/parse", response_model=ParseResponse)
def parse_text(
    request_body: ParseRequest,
    request: Request,
    config: Settings = Depends(get_settings),
):
    """
    Parse a free-text statement into income/expense records.

    Always answers with a list; an empty list means nothing was parsed.
    """
    start_time = time.time()
    oracle_output = request_body.oracle_output if config.oracle_enabled else None

    parsed, engine = parse_with_fallback(request_body.text, oracle_output, request_body.today)

    if parsed is None:
        records = []
    elif isinstance(parsed, list):
        records = parsed
    else:
        records = [parsed]

    categories = [record.category or record.type for record in records]
    record_classification(engine, categories, oracle_output is not None, "parse")
    log_classification(get_request_id(request), "parse", engine, len(records), (time.time() - start_time) * 1000)

    return ParseResponse(records=[asdict(record) for record in records], engine=engine)


@router.post("/expenses/complete", response_model=ExpenseCompletionResponse)
def complete_expense_fields(request_body: ExpenseCompletionRequest):
    """Fill a missing category or deductibility flag from the expense description"""
    category, is_deductible = complete_expense(
        request_body.description,
        request_body.category,
        request_body.is_deductible,
    )
    return ExpenseCompletionResponse(category=category, is_deductible=is_deductible)
