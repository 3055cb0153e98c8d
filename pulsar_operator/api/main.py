from __future__ import annotations

from fastapi import FastAPI

from pulsar_operator.api.endpoints import connection_refs, health
from pulsar_operator.api.endpoints import metrics as metrics_ep
from pulsar_operator.api.middleware.error_shaping import SafeErrorMiddleware
from pulsar_operator.api.middleware.request_context import RequestContextMiddleware
from pulsar_operator.core.config.settings import load_settings

settings = load_settings()

app = FastAPI(
    title="Pulsar Operator Connection Ref Mapper",
    version="0.1.0",
)

# ------------------------------------------------------------
# Middleware stack (ORDER MATTERS)
# Starlette reverses add_middleware order: the LAST call is the OUTERMOST wrapper.
#   SafeErrorMiddleware → RequestContext → handler
# ------------------------------------------------------------
app.add_middleware(RequestContextMiddleware, metrics_enabled=settings.metrics_enabled)
app.add_middleware(SafeErrorMiddleware)


app.include_router(health.router)
app.include_router(metrics_ep.router)
if settings.metrics_enabled:
    app.include_router(metrics_ep.scrape_router)
app.include_router(connection_refs.router)
