from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from pydantic import ValidationError

from .models import HasConnectionReference, Resource, kind_registry

_log = logging.getLogger("pulsar_operator.resources")


class ResourceDecodeError(ValueError):
    """Raised when a manifest of a known shape cannot be turned into a model."""

    def __init__(self, message: str, *, kind: Optional[str] = None, errors: Optional[List[Any]] = None):
        super().__init__(message)
        self.kind = kind
        self.errors = errors or []


def supported_kinds() -> List[str]:
    return sorted(kind_registry())


def references_connection(kind: str) -> bool:
    cls = kind_registry().get(kind)
    if cls is None:
        return False
    return issubclass(cls, HasConnectionReference)


def decode_resource(manifest: Mapping[str, Any]) -> Optional[Resource]:
    """
    Build the resource model for a deserialized manifest.

    Unknown kinds return None so callers can treat them as "nothing to map".
    Structural problems (not a mapping, no kind, schema violations) raise
    ResourceDecodeError.
    """
    if not isinstance(manifest, Mapping):
        raise ResourceDecodeError(f"manifest must be a mapping, got {type(manifest).__name__}")

    kind = manifest.get("kind")
    if not isinstance(kind, str) or not kind.strip():
        raise ResourceDecodeError("manifest is missing 'kind'")

    cls = kind_registry().get(kind)
    if cls is None:
        _log.debug("Skipping manifest of unsupported kind %r", kind)
        return None

    try:
        return cls.model_validate(dict(manifest))
    except ValidationError as exc:
        raise ResourceDecodeError(
            f"invalid {kind} manifest: {exc.error_count()} validation error(s)",
            kind=kind,
            errors=exc.errors(include_url=False),
        ) from exc
