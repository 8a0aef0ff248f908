"""Prometheus metrics definitions for the Adyax web service."""

from prometheus_client import Counter, Gauge, Histogram

# Business metrics
nodes_written = Counter(
    "adyax_ws_nodes_written_total",
    "Total nodes created, updated or deleted",
    ["operation"],  # create, update, delete
)

validation_failures = Counter(
    "adyax_ws_validation_failures_total",
    "Requests answered with validation errors",
    ["operation"],  # read, create, update, delete
)

request_duration = Histogram(
    "adyax_ws_request_duration_seconds",
    "Time to handle a node request including validation and storage",
    ["operation"],
)

# Current state gauges
node_count = Gauge(
    "adyax_ws_node_count",
    "Current number of nodes, refreshed by the health check",
)
