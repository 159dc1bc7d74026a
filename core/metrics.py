"""
Prometheus metrics for the license service.

Custom metrics for business logic and performance monitoring.
"""

from prometheus_client import Counter, Histogram

# HTTP metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
)

# License metrics
license_activations_total = Counter(
    "license_activations_total",
    "Activation requests by outcome",
    ["outcome"],
)

license_validations_total = Counter(
    "license_validations_total",
    "Validation requests by outcome",
    ["outcome"],
)

licenses_issued_total = Counter(
    "licenses_issued_total",
    "Total license keys issued",
)

licenses_revoked_total = Counter(
    "licenses_revoked_total",
    "Total licenses revoked",
)

# Fraud signal watched by external monitoring
security_alerts_total = Counter(
    "security_alerts_total",
    "Requests that crossed the fraud-attempt threshold",
)

history_append_failures_total = Counter(
    "history_append_failures_total",
    "Activation history records that could not be written",
    ["action"],
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)
