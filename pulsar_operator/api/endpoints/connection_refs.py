from __future__ import annotations

from typing import Any, Dict, Mapping

from fastapi import APIRouter, Body, Query

from pulsar_operator.core.mapping.connection_ref import (
    get_connection_namespace,
    index_connection_ref,
    make_connection_ref_index_key,
    map_to_requests,
)
from pulsar_operator.core.resources.decode import decode_resource, references_connection, supported_kinds

router = APIRouter(prefix="/api/v1/connection-refs", tags=["connection_refs"])


def _manifest_namespace(manifest: Mapping[str, Any]) -> str:
    meta = manifest.get("metadata")
    if not isinstance(meta, Mapping):
        return ""
    ns = meta.get("namespace")
    return ns if isinstance(ns, str) else ""


@router.get("/kinds")
def list_kinds():
    return {
        "kinds": [
            {"kind": k, "references_connection": references_connection(k)}
            for k in supported_kinds()
        ],
    }


@router.post("/map")
def map_manifest(manifest: Dict[str, Any] = Body(...)):
    """Dry-run: which connection would a watch event on this manifest re-queue.

    Decode failures surface as 400 through SafeErrorMiddleware.
    """
    obj = decode_resource(manifest)
    effective_ns = get_connection_namespace(obj) if obj is not None else _manifest_namespace(manifest)
    return {
        "kind": manifest.get("kind"),
        "requests": [r.to_dict() for r in map_to_requests(obj)],
        "index_keys": index_connection_ref(obj),
        "effective_namespace": effective_ns,
    }


@router.get("/index-key")
def index_key(name: str = Query(..., min_length=1), namespace: str = Query(..., min_length=1)):
    return {"key": make_connection_ref_index_key(name, namespace)}
