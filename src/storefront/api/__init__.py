"""Storefront API package."""

from storefront.api.routes import (
    admin_router,
    blog_router,
    cart_router,
    category_router,
    checkout_router,
    order_router,
    product_router,
    profile_router,
)

__all__ = [
    "product_router",
    "category_router",
    "profile_router",
    "cart_router",
    "checkout_router",
    "order_router",
    "blog_router",
    "admin_router",
]
