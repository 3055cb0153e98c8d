from __future__ import annotations

import logging
import traceback
from typing import Any, Callable, Dict, Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

from pulsar_operator.core.resources.decode import ResourceDecodeError

log = logging.getLogger("pulsar_operator.errors")


def decode_error_detail(err: ResourceDecodeError) -> Dict[str, Any]:
    """Client-safe view of a manifest decode failure (no input values echoed)."""
    return {
        "message": str(err),
        "kind": err.kind,
        "errors": [
            {"loc": list(e.get("loc", ())), "msg": e.get("msg", ""), "type": e.get("type", "")}
            for e in err.errors
        ],
    }


def _shaped(status_code: int, detail: Any, rid: Optional[str]) -> JSONResponse:
    payload: Dict[str, Any] = {"detail": detail}
    if rid:
        payload["request_id"] = rid
    resp = JSONResponse(status_code=status_code, content=payload)
    if rid:
        resp.headers["X-Request-Id"] = rid
    return resp


class SafeErrorMiddleware(BaseHTTPMiddleware):
    """
    Outermost error boundary.

    - ResourceDecodeError -> 400 with the validation summary
    - anything else -> 500, traceback logged server-side only
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except ResourceDecodeError as e:
            rid = getattr(request.state, "request_id", None) or request.headers.get("x-request-id")
            log.warning("Rejected manifest kind=%s rid=%s path=%s: %s", e.kind, rid, request.url.path, e)
            return _shaped(400, decode_error_detail(e), rid)
        except Exception as e:
            rid = getattr(request.state, "request_id", None) or request.headers.get("x-request-id")
            log.error(
                "Unhandled error: %s rid=%s path=%s\n%s",
                str(e),
                rid,
                request.url.path,
                traceback.format_exc(),
            )
            return _shaped(500, "Internal Server Error", rid)
