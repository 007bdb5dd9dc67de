"""Prometheus metrics for logins, session checks and payment transitions"""

from prometheus_client import Counter, Histogram

# Authentication metrics
login_counter = Counter(
    "payment_desk_login_total",
    "Login attempts",
    ["outcome"],  # success | invalid_credentials | malformed | config_error
)

session_rejection_counter = Counter(
    "payment_desk_session_rejections_total",
    "Protected requests turned away by the session gateway",
    ["reason"],  # missing | invalid | config_error
)

# Workflow metrics
transition_counter = Counter(
    "payment_desk_transition_total",
    "Payment status transition attempts",
    ["action", "outcome"],  # outcome: applied | denied | not_found
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_transition(action: str, outcome: str) -> None:
    transition_counter.labels(action=action, outcome=outcome).inc()
