"""Prometheus metrics for travel ID allocation and night reallocation."""

from prometheus_client import Counter

travel_id_attempts_total = Counter(
    "travel_id_attempts_total",
    "Travel ID candidates checked against storage",
    ["company", "outcome"],
)

travel_id_allocation_failures_total = Counter(
    "travel_id_allocation_failures_total",
    "Travel ID allocations that exhausted every attempt",
    ["company"],
)

night_reallocations_total = Counter(
    "night_reallocations_total",
    "Voucher night edits rebalanced across hotel stays",
    ["clamped"],
)


class PrometheusTravelIdMetrics:
    """Prometheus-based travel ID metrics implementation."""

    def record_attempt(self, company: str, outcome: str) -> None:
        """Count one candidate check ("free" or "collision")."""
        travel_id_attempts_total.labels(company=company, outcome=outcome).inc()

    def inc_failure(self, company: str) -> None:
        """Count an exhausted allocation."""
        travel_id_allocation_failures_total.labels(company=company).inc()
