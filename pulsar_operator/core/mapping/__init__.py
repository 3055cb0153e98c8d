from .connection_ref import (
    CONNECTION_REF_INDEX_FIELD,
    ConnectionRefInfo,
    ConnectionRefMapper,
    ReconcileRequest,
    extract_connection_ref,
    get_connection_namespace,
    index_connection_ref,
    make_connection_ref_index_key,
    map_to_requests,
    resolve_connection_ref_info,
    split_connection_ref_index_key,
)
from .events import WatchEvent, WatchEventType, handle_event

__all__ = [
    "CONNECTION_REF_INDEX_FIELD",
    "ConnectionRefInfo",
    "ConnectionRefMapper",
    "ReconcileRequest",
    "WatchEvent",
    "WatchEventType",
    "extract_connection_ref",
    "get_connection_namespace",
    "handle_event",
    "index_connection_ref",
    "make_connection_ref_index_key",
    "map_to_requests",
    "resolve_connection_ref_info",
    "split_connection_ref_index_key",
]
