"""Prometheus metrics for tax computations and classifier engine usage"""

from prometheus_client import Counter, Histogram

# Tax metrics
tax_calculation_counter = Counter(
    "finlytics_tax_calculations_total",
    "Total tax computations",
    ["taxpayer_category"],
)

tax_payable_bucket_counter = Counter(
    "finlytics_tax_payable_bucket",
    "Tax payable results by bucket",
    ["bucket"],  # 0, 1-10k, 10k-100k, 100k+
)

# Classifier metrics
classification_counter = Counter(
    "finlytics_classifications_total",
    "Classified records by answering engine",
    ["engine", "category"],  # engine: oracle | rules
)

oracle_rejection_counter = Counter(
    "finlytics_oracle_rejections_total",
    "Oracle answers discarded in favour of the rule engine",
    ["operation"],  # classify | parse
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_tax_calculation(taxpayer_category: str, tax_payable: int) -> None:
    """Record tax computation metrics for category mix and liability distribution"""
    tax_calculation_counter.labels(taxpayer_category=taxpayer_category).inc()

    if tax_payable == 0:
        bucket = "0"
    elif tax_payable <= 10_000:
        bucket = "1-10k"
    elif tax_payable <= 100_000:
        bucket = "10k-100k"
    else:
        bucket = "100k+"

    tax_payable_bucket_counter.labels(bucket=bucket).inc()


def record_classification(engine: str, categories: list[str], oracle_offered: bool, operation: str) -> None:
    """Record which engine answered and count oracle answers that were discarded"""
    for category in categories:
        classification_counter.labels(engine=engine, category=category).inc()

    if oracle_offered and engine == "rules":
        oracle_rejection_counter.labels(operation=operation).inc()
