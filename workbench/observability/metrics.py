"""
Prometheus counters for outbound document sync.

Dependencies: prometheus_client
System role: Success/error accounting for data source upserts
"""

from prometheus_client import Counter

DATA_SOURCE_UPSERTS_SUCCESS = Counter(
    "data_source_upserts_success",
    "Documents successfully upserted to a data source",
    ["data_source_name", "workspace_id"],
)

DATA_SOURCE_UPSERTS_ERROR = Counter(
    "data_source_upserts_error",
    "Failed document upsert attempts to a data source",
    ["data_source_name", "workspace_id"],
)


def record_upsert(data_source_name: str, workspace_id: str, success: bool) -> None:
    """Increment the upsert success or error counter for a data source."""
    counter = DATA_SOURCE_UPSERTS_SUCCESS if success else DATA_SOURCE_UPSERTS_ERROR
    counter.labels(data_source_name=data_source_name, workspace_id=workspace_id).inc()
