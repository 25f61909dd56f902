"""Prometheus metrics for the notes store.

All metric objects are defined here so they can be imported from any module.
"""

from prometheus_client import Counter, Gauge, Histogram

# ---------------------------------------------------------------------------
# Store operation metrics
# ---------------------------------------------------------------------------

STORE_OPERATIONS = Counter(
    "notes_store_operations_total",
    "Total number of note store operations",
    ["operation", "status"],  # status: success, not_found, failed
)

PERSIST_DURATION = Histogram(
    "notes_store_persist_seconds",
    "Duration of store flushes to disk in seconds",
    buckets=(0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0),
)

# ---------------------------------------------------------------------------
# Store content metrics
# ---------------------------------------------------------------------------

NOTES_COUNT = Gauge(
    "notes_store_notes",
    "Number of notes currently held by the store",
)
