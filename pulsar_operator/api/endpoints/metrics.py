from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from pulsar_operator.core.observability.metrics import snapshot_named, snapshot_requests

router = APIRouter()


def _render():
    req = snapshot_requests()
    named = snapshot_named()
    return {
        "requests": req,
        "requests_total": req.get("requests_total", 0),
        "connection_refs": {
            "mapped": named.get("connection_ref_mapped", 0),
            "skipped": named.get("connection_ref_skipped", 0),
        },
        **named,
    }


@router.get("/metrics/snapshot")
def metrics_snapshot():
    return _render()


@router.get("/api/v1/metrics/snapshot")
def metrics_snapshot_v1():
    return _render()


# Scrape endpoint, registered only when metrics are enabled.
scrape_router = APIRouter()


@scrape_router.get("/metrics", include_in_schema=False)
def prometheus_metrics() -> Response:
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
