"""Marketplace domain API package."""

from marketplace.api.routes import (
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

__all__ = [
    "store_router",
    "product_router",
    "category_router",
    "collection_router",
    "cart_router",
    "wishlist_router",
    "coupon_router",
    "order_router",
    "escrow_router",
    "analytics_router",
    "review_router",
]
