"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# Booking metrics
booking_submissions = Counter(
    'unibook_booking_submissions_total',
    'Total booking submissions',
    ['outcome']  # created, invalid, conflict, error
)

booking_submission_latency = Histogram(
    'unibook_booking_submission_latency_seconds',
    'Booking submission latency',
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0]
)

status_transitions = Counter(
    'unibook_status_transitions_total',
    'Booking status transitions applied by administrators',
    ['status']  # approved, rejected
)

# Notification metrics
notifications = Counter(
    'unibook_notifications_total',
    'Notifications handed to the notification sink',
    ['kind', 'result']  # submission/decision/welcome, sent/failed
)

# Store metrics
store_operations = Counter(
    'unibook_store_operations_total',
    'Key-value store operations',
    ['operation', 'result']  # get/set/scan, ok/error
)


def metrics_endpoint() -> Response:
    """Prometheus metrics endpoint."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def record_booking_submission(outcome: str):
    """Record booking submission. Outcome: created, invalid, conflict, error"""
    booking_submissions.labels(outcome=outcome).inc()


def record_status_transition(new_status: str):
    status_transitions.labels(status=new_status).inc()


def record_notification(kind: str, sent: bool):
    result = "sent" if sent else "failed"
    notifications.labels(kind=kind, result=result).inc()


def record_store_operation(operation: str, ok: bool = True):
    store_operations.labels(operation=operation, result="ok" if ok else "error").inc()
