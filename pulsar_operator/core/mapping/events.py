from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List

from pulsar_operator.core.observability.metrics import inc_mapping_event
from pulsar_operator.core.resources.decode import decode_resource

from .connection_ref import ReconcileRequest, map_to_requests

_log = logging.getLogger("pulsar_operator.events")


class WatchEventType(str, Enum):
    ADDED = "ADDED"
    MODIFIED = "MODIFIED"
    DELETED = "DELETED"


@dataclass(frozen=True)
class WatchEvent:
    type: WatchEventType
    object: Any

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "WatchEvent":
        """Decode a raw watch payload: {"type": "ADDED", "object": {...manifest}}."""
        ev_type = WatchEventType(str(d["type"]).upper())
        raw = d.get("object")
        obj = decode_resource(raw) if raw is not None else None
        return WatchEvent(type=ev_type, object=obj)


def _kind_of(obj: Any) -> str:
    kind = getattr(obj, "kind", None)
    return kind if isinstance(kind, str) and kind else "unknown"


def handle_event(
    event: WatchEvent,
    enqueue: Callable[[ReconcileRequest], None],
) -> List[ReconcileRequest]:
    """
    Map one watch event and hand every resulting request to ``enqueue``.

    DELETED events are mapped from the object as delivered; no prior state
    is looked up.
    """
    requests = map_to_requests(event.object)
    kind = _kind_of(event.object)

    if not requests:
        inc_mapping_event(kind, event.type.value, "skipped")
        _log.debug("event=%s kind=%s produced no connection request", event.type.value, kind)
        return []

    for req in requests:
        enqueue(req)
        _log.debug(
            "event=%s kind=%s enqueued connection %s",
            event.type.value,
            kind,
            req.namespaced_name,
        )
    inc_mapping_event(kind, event.type.value, "mapped")
    return requests
