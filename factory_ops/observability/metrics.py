"""
Prometheus metrics for factory-ops

Row and import counters per data kind, anomaly counts per severity, and the
time spent building insight reports. Everything is registered on a private
registry so embedding applications and tests never collide with the
default one.
"""
from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest

REGISTRY = CollectorRegistry()

# outcome: accepted | rejected
rows_parsed_total = Counter(
    "factory_ops_rows_parsed_total",
    "Rows processed by the import validator",
    ["data_kind", "outcome"],
    registry=REGISTRY,
)

row_warnings_total = Counter(
    "factory_ops_row_warnings_total",
    "Soft-rule warnings raised while validating rows",
    ["data_kind"],
    registry=REGISTRY,
)

# status: imported | blocked | decode_error
imports_total = Counter(
    "factory_ops_imports_total",
    "Import attempts by outcome",
    ["data_kind", "status"],
    registry=REGISTRY,
)

anomalies_detected_total = Counter(
    "factory_ops_anomalies_detected_total",
    "Anomalies emitted by the insights engine",
    ["severity"],
    registry=REGISTRY,
)

insights_duration_seconds = Histogram(
    "factory_ops_insights_duration_seconds",
    "Time spent generating an insights report",
    buckets=(0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0),
    registry=REGISTRY,
)


def record_parse_result(data_kind: str, accepted: int, rejected: int, warnings: int) -> None:
    """Count the rows of one validated file."""
    rows_parsed_total.labels(data_kind, "accepted").inc(accepted)
    rows_parsed_total.labels(data_kind, "rejected").inc(rejected)
    row_warnings_total.labels(data_kind).inc(warnings)


def record_import(data_kind: str, status: str) -> None:
    imports_total.labels(data_kind, status).inc()


def record_anomalies(severities: list[str]) -> None:
    for severity in severities:
        anomalies_detected_total.labels(severity).inc()


def render_metrics() -> str:
    """Current values in the Prometheus text exposition format."""
    return generate_latest(REGISTRY).decode("utf-8")
