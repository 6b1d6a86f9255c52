"""Prometheus metrics for monitoring risk mix, pricing, matching and commissions"""

from prometheus_client import Counter, Histogram

# Scoring metrics
credit_assessment_counter = Counter(
    "lending_credit_assessment_total",
    "Credit assessments performed",
    ["risk_category"],  # Low Risk | Medium Risk | High Risk
)

# Pricing metrics
quoted_rate_histogram = Histogram(
    "lending_quoted_rate_percent",
    "Interest rates quoted",
    buckets=[8, 9, 10, 11, 12, 14, 16, 18, 20, 22],
)

rate_floor_counter = Counter(
    "lending_rate_floor_applied_total",
    "Quotes clamped to the minimum rate",
)

# Matching metrics
match_run_counter = Counter(
    "lending_match_runs_total",
    "Batch borrower matching runs",
)

matched_borrowers_counter = Counter(
    "lending_matched_borrowers_total",
    "Borrowers returned by matching runs",
)

# Commission metrics
commission_status_counter = Counter(
    "lending_commission_status_total",
    "Commission records created or transitioned, by resulting status",
    ["status"],  # pending | paid | cancelled
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_credit_assessment(risk_category: str) -> None:
    credit_assessment_counter.labels(risk_category=risk_category).inc()


def record_rate_quote(rate: float, floor_applied: bool) -> None:
    """Record quoted rate distribution"""
    quoted_rate_histogram.observe(rate)
    if floor_applied:
        rate_floor_counter.inc()


def record_match_run(matched: int) -> None:
    match_run_counter.inc()
    matched_borrowers_counter.inc(matched)


def record_commission_status(status: str) -> None:
    commission_status_counter.labels(status=status).inc()
