from __future__ import annotations

from collections import Counter
from typing import Dict, Optional

from prometheus_client import Counter as PromCounter
from prometheus_client import Histogram

# Requests counters (HTTP-level)
_REQUESTS = Counter()

# Named counters (custom)
_NAMED = Counter()

CONNECTION_REF_EVENTS_TOTAL = PromCounter(
    "pulsar_operator_connection_ref_events_total",
    "Watch events passed through the connection reference mapper",
    ["kind", "event", "outcome"],
)

HTTP_REQUESTS_TOTAL = PromCounter(
    "pulsar_operator_http_requests_total",
    "HTTP requests served by the probe/dry-run API",
    ["method", "route", "status"],
)

HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "pulsar_operator_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "route"],
)

# Every route the API serves; anything else is folded into one label value
# so scanners hitting random paths cannot blow up label cardinality.
_ROUTES = frozenset(
    {
        "/metrics",
        "/metrics/snapshot",
        "/health/live",
        "/health/ready",
        "/api/v1/health/live",
        "/api/v1/health/ready",
        "/api/v1/metrics/snapshot",
        "/api/v1/connection-refs/kinds",
        "/api/v1/connection-refs/map",
        "/api/v1/connection-refs/index-key",
    }
)
_CONNECTION_REFS_PREFIX = "/api/v1/connection-refs/"


def route_label(path: str) -> str:
    p = (path or "/").rstrip("/") or "/"
    if p in _ROUTES:
        return p
    if p.startswith(_CONNECTION_REFS_PREFIX):
        return _CONNECTION_REFS_PREFIX + ":unmatched"
    return ":unmatched"


def reset_metrics() -> None:
    """
    Test helper: clears in-process counters to avoid cross-test leakage.
    Prometheus collectors are process-global and are left untouched.
    """
    _REQUESTS.clear()
    _NAMED.clear()


def observe_http(method: str, path: str, status: Optional[int], duration_s: float) -> None:
    m = (method or "UNKNOWN").upper()
    route = route_label(path)
    s = str(status) if status is not None else "unknown"

    HTTP_REQUESTS_TOTAL.labels(method=m, route=route, status=s).inc()
    HTTP_REQUEST_DURATION_SECONDS.labels(method=m, route=route).observe(duration_s)

    _REQUESTS["requests_total"] += 1
    _REQUESTS[f"requests_{m}"] += 1
    _REQUESTS[f"route_{route}|{s}"] += 1


def inc_named(name: str, value: int = 1) -> None:
    if not name:
        return
    _NAMED[name] += int(value)


def inc_mapping_event(kind: str, event: str, outcome: str) -> None:
    CONNECTION_REF_EVENTS_TOTAL.labels(kind=kind or "unknown", event=event, outcome=outcome).inc()
    inc_named(f"connection_ref_{outcome}")


def snapshot_requests() -> Dict[str, int]:
    return dict(_REQUESTS)


def snapshot_named() -> Dict[str, int]:
    return dict(_NAMED)
