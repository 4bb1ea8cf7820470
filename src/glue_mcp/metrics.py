"""Prometheus counters for Glue catalog tool calls."""

from prometheus_client import Counter

TOOL_CALLS = Counter(
    "glue_mcp_tool_calls_total",
    "Total number of catalog tool invocations",
    labelnames=["operation"],
)

TOOL_ERRORS = Counter(
    "glue_mcp_tool_errors_total",
    "Total number of failed catalog tool invocations",
    labelnames=["operation", "kind"],
)


def record_call(operation: str) -> None:
    TOOL_CALLS.labels(operation=operation).inc()


def record_error(operation: str, kind: str) -> None:
    TOOL_ERRORS.labels(operation=operation, kind=kind).inc()
