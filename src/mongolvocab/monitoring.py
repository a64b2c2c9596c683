"""Monitoring configuration for the vocabulary core."""
from prometheus_client import Counter, start_http_server

# Storage metrics
storage_operations = Counter(
    "mongolvocab_storage_operations_total",
    "Total number of storage operations",
    ["backend", "operation"],
)

storage_errors = Counter(
    "mongolvocab_storage_errors_total",
    "Total number of storage failures absorbed at the backend boundary",
    ["backend", "operation"],
)

# Dictionary metrics
words_added = Counter(
    "mongolvocab_words_added_total",
    "Total number of custom words added",
)

words_deleted = Counter(
    "mongolvocab_words_deleted_total",
    "Total number of words deleted or hidden",
)

# Learning metrics
streak_updates = Counter(
    "mongolvocab_streak_updates_total",
    "Total number of streak evaluations that changed the streak",
    ["outcome"],
)

pack_upgrades = Counter(
    "mongolvocab_pack_upgrades_total",
    "Total number of pack upgrades applied",
    ["mode"],
)


def start_monitoring(port: int = 9090) -> None:
    """Start the Prometheus metrics server."""
    start_http_server(port)
