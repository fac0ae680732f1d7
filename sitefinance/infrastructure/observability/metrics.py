"""Prometheus metrics for monitoring financial reads, document feeds and procurement calls"""

from typing import Mapping
from prometheus_client import Counter, Histogram
from sitefinance.domain.models import CostControlResult

# Financials metrics
financials_counter = Counter(
    "sitefinance_financials_total",
    "Total project financials computations",
)

cost_status_counter = Counter(
    "sitefinance_cost_status_total",
    "Cost-control classifications issued",
    ["category", "status"],  # material|labor|other x NO_DATA|GOOD|OVER|UNDER
)

# Document feed metrics
document_feed_size_histogram = Histogram(
    "sitefinance_document_feed_size",
    "Number of records in an aggregated document feed",
    buckets=[0, 1, 5, 10, 25, 50, 100, 250],
)

# Procurement API metrics
procurement_fetch_failures_counter = Counter(
    "procurement_fetch_failures_total",
    "Failed procurement API calls",
)

# Lifecycle metrics
status_transition_counter = Counter(
    "sitefinance_status_transition_total",
    "Project status transitions",
    ["status"],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_financials(report: Mapping[str, CostControlResult]) -> None:
    """Count one financials read and the cost-control status of each category"""
    financials_counter.inc()
    for category, result in report.items():
        cost_status_counter.labels(category=category, status=result.status.value).inc()
