"""
Connection reference mapping.

Dependent resources (tenants, topics, permissions, functions, ...) point at
the PulsarConnection they are reconciled against through ``spec.connectionRef``.
A watch on a dependent kind only re-queues the dependent itself, so these
helpers invert the reference and produce the request for the connection.

Default-namespace rule: a reference without a namespace lives in the
namespace of the object that declares it. Cross-namespace references are
honored verbatim.

Every function here is pure: no I/O, no shared mutable state, safe to call
concurrently from any number of watch workers.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from pulsar_operator.core.resources.models import ConnectionReference, HasConnectionReference

_log = logging.getLogger("pulsar_operator.mapper")

# Field name the reverse index is registered under.
CONNECTION_REF_INDEX_FIELD = "spec.connectionRef"

_INDEX_KEY_SEP = "/"


@dataclass(frozen=True)
class ConnectionRefInfo:
    name: str
    namespace: str


@dataclass(frozen=True)
class ReconcileRequest:
    namespace: str
    name: str

    @property
    def namespaced_name(self) -> str:
        return f"{self.namespace}/{self.name}"

    def to_dict(self) -> Dict[str, str]:
        return {"namespace": self.namespace, "name": self.name}


def _object_namespace(obj: Any) -> str:
    meta = getattr(obj, "metadata", None)
    ns = getattr(meta, "namespace", None)
    if ns is None:
        ns = getattr(obj, "namespace", None)
    return ns if isinstance(ns, str) else ""


def extract_connection_ref(obj: Any) -> Optional[ConnectionReference]:
    """Return the reference declared by ``obj``, or None when it has none.

    Objects without the capability, and references with an empty name, are
    both treated as "no reference".
    """
    if not isinstance(obj, HasConnectionReference):
        return None
    ref = obj.get_connection_ref()
    if ref is None or not getattr(ref, "name", ""):
        return None
    return ref


def resolve_connection_ref_info(obj: Any) -> Optional[ConnectionRefInfo]:
    ref = extract_connection_ref(obj)
    if ref is None:
        return None
    ns = ref.namespace or _object_namespace(obj)
    return ConnectionRefInfo(name=ref.name, namespace=ns)


def map_to_requests(obj: Any) -> List[ReconcileRequest]:
    """
    Translate a dependent object into the connection request(s) to enqueue.

    Returns [] or a single request. Used for create, update and delete
    events alike; the object is taken as-is.
    """
    info = resolve_connection_ref_info(obj)
    if info is None:
        _log.debug("No connection reference on %s; nothing to enqueue", type(obj).__name__)
        return []
    return [ReconcileRequest(namespace=info.namespace, name=info.name)]


class ConnectionRefMapper:
    """Callable handler form of :func:`map_to_requests`."""

    def map(self, obj: Any) -> List[ReconcileRequest]:
        return map_to_requests(obj)

    def __call__(self, obj: Any) -> List[ReconcileRequest]:
        return map_to_requests(obj)


def get_connection_namespace(obj: Any) -> str:
    """
    Namespace where the object's connection lives.

    Falls back to the object's own namespace when there is no reference at all.
    """
    info = resolve_connection_ref_info(obj)
    if info is None:
        return _object_namespace(obj)
    return info.namespace


def make_connection_ref_index_key(name: str, namespace: str) -> str:
    # Both index writers and readers must go through here.
    return namespace + _INDEX_KEY_SEP + name


def split_connection_ref_index_key(key: str) -> Tuple[str, str]:
    """Inverse of make_connection_ref_index_key: returns (namespace, name)."""
    if _INDEX_KEY_SEP not in key:
        raise ValueError(f"Invalid connection ref index key: {key!r}")
    namespace, name = key.split(_INDEX_KEY_SEP, 1)
    return namespace, name


def index_connection_ref(obj: Any) -> List[str]:
    """Field indexer: keys under which ``obj`` appears in the reverse index."""
    info = resolve_connection_ref_info(obj)
    if info is None:
        return []
    return [make_connection_ref_index_key(info.name, info.namespace)]
