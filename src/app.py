"""Atelier FastAPI application.

Multi-domain web server that processes commands synchronously via HTTP.
Each request is wrapped in the correct domain context based on URL prefix.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# Domains are initialized at module level so uvicorn workers share them.
# PROTEAN_ENV selects the config overlay from pyproject.toml:
#   - unset        → event_processing = "sync"  (handlers fire in UoW)
#   - "production" → event_processing = "async" (handlers fire via Engine)
from administration.domain import administration  # noqa: E402
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from identity.domain import identity  # noqa: E402
from marketplace.domain import marketplace  # noqa: E402
from protean.integrations.fastapi import register_exception_handlers
from shared.logging import request_context

identity.init()
marketplace.init()
administration.init()

# ---------------------------------------------------------------------------
# Route-to-domain mapping
# ---------------------------------------------------------------------------
_ROUTE_DOMAIN_MAP = {
    "/users": identity,
    "/stores": marketplace,
    "/products": marketplace,
    "/collections": marketplace,
    "/cart": marketplace,
    "/wishlist": marketplace,
    "/coupons": marketplace,
    "/orders": marketplace,
    "/escrows": marketplace,
    "/analytics": marketplace,
    "/reports": administration,
    "/settings": administration,
    "/audit-logs": administration,
}


def _resolve_domain(path: str):
    """Return the domain for the given request path, or None."""
    for prefix, domain in _ROUTE_DOMAIN_MAP.items():
        if path.startswith(prefix):
            return domain
    return None


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Atelier API",
    description="Fashion marketplace: Identity, Marketplace & Administration domains",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the correct Protean domain context for each request."""
    domain = _resolve_domain(request.url.path)
    if domain is None:
        # Health check and docs
        return await call_next(request)

    with domain.domain_context(), request_context(
        domain=domain.name,
        method=request.method,
        path=request.url.path,
        user_id=request.headers.get("x-user-id") or None,
    ):
        return await call_next(request)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from administration.api import audit_router, report_router, setting_router  # noqa: E402
from identity.api import router as identity_router  # noqa: E402
from marketplace.api import (  # noqa: E402
    analytics_router,
    cart_router,
    category_router,
    collection_router,
    coupon_router,
    escrow_router,
    order_router,
    product_router,
    review_router,
    store_router,
    wishlist_router,
)

app.include_router(identity_router)
for router in (
    store_router,
    product_router,
    category_router,
    collection_router,
    cart_router,
    wishlist_router,
    coupon_router,
    order_router,
    escrow_router,
    analytics_router,
    review_router,
):
    app.include_router(router)
app.include_router(report_router)
app.include_router(setting_router)
app.include_router(audit_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {
                "identity": {"name": identity.name},
                "marketplace": {"name": marketplace.name},
                "administration": {"name": administration.name},
            },
        }
    )
