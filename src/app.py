"""Storefront FastAPI application.

Web server for the storefront domain. Commands are processed synchronously
inside each request; the shopper is identified by the `X-User-Id` header.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay from domain.toml:
#   - "test"       → in-memory stores
#   - "production" → PostgreSQL
import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from storefront.domain import storefront  # noqa: E402

storefront.init()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Storefront API",
    description="E-commerce storefront: catalog, cart, checkout, orders and blog",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


_CONTEXT_FREE_PATHS = {"/health", "/docs", "/openapi.json", "/redoc"}


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the storefront domain context for each request."""
    if request.url.path in _CONTEXT_FREE_PATHS:
        return await call_next(request)
    with storefront.domain_context(), structlog.contextvars.bound_contextvars(
        path=request.url.path, user_id=request.headers.get("x-user-id")
    ):
        response = await call_next(request)
    return response


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from storefront.api import (  # noqa: E402
    admin_router,
    blog_router,
    cart_router,
    category_router,
    checkout_router,
    order_router,
    product_router,
    profile_router,
)

app.include_router(product_router)
app.include_router(category_router)
app.include_router(profile_router)
app.include_router(cart_router)
app.include_router(checkout_router)
app.include_router(order_router)
app.include_router(blog_router)
app.include_router(admin_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": storefront.name})
