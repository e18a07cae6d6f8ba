"""
Metrics Collection with Prometheus.

Exposes verifyReceipt traffic and outcome metrics for monitoring.
"""

from prometheus_client import Counter, Histogram

from receipt_validation.config import settings


class ReceiptValidationMetrics:
    """
    Centralized metrics for receipt validation.

    - verifyReceipt attempts (rate, duration, outcome per environment)
    - production to sandbox fallbacks
    - final validation results
    """

    def __init__(self) -> None:
        """Initialize all Prometheus metrics."""
        self.verify_attempts_total = Counter(
            "receipt_verify_attempts_total",
            "Total verifyReceipt calls by environment and outcome",
            ["environment", "outcome"],
        )

        self.verify_attempt_duration_seconds = Histogram(
            "receipt_verify_attempt_duration_seconds",
            "verifyReceipt call duration in seconds",
            ["environment"],
            buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
        )

        self.environment_fallbacks_total = Counter(
            "receipt_environment_fallbacks_total",
            "Production attempts retried against the sandbox",
        )

        self.validations_total = Counter(
            "receipt_validations_total",
            "Total receipt validations by final outcome",
            ["outcome"],
        )

    def record_attempt(self, environment: str, outcome: str, duration: float) -> None:
        """Record one verifyReceipt call."""
        if not settings.metrics_enabled:
            return

        self.verify_attempts_total.labels(environment=environment, outcome=outcome).inc()
        self.verify_attempt_duration_seconds.labels(environment=environment).observe(duration)

    def record_fallback(self) -> None:
        """Record a retry against the sandbox."""
        if not settings.metrics_enabled:
            return

        self.environment_fallbacks_total.inc()

    def record_validation(self, outcome: str) -> None:
        """Record the final outcome of one validate call."""
        if not settings.metrics_enabled:
            return

        self.validations_total.labels(outcome=outcome).inc()


# Global metrics instance
metrics = ReceiptValidationMetrics()
