"""Cross-domain event contracts for Marketplace domain events.

Identity consumes StoreOpened to promote the owner to the Professional
role. Administration consumes the remaining events to keep its audit log.

The source-of-truth events live next to their aggregates under
src/marketplace/.
"""

from protean.core.event import BaseEvent
from protean.fields import Boolean, DateTime, Float, Identifier, String, Text


class StoreOpened(BaseEvent):
    """A professional opened a store on the marketplace."""

    __version__ = 1

    store_id = Identifier(required=True)
    professional_id = Identifier(required=True)
    business_name = String(required=True)
    opened_at = DateTime(required=True)


class OrderPlaced(BaseEvent):
    """A customer placed an order; stock was taken and escrows were opened."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    items = Text(required=True)  # JSON list of line dicts
    professional_ids = Text(required=True)  # JSON list
    subtotal = Float(required=True)
    shipping_cost = Float()
    discount = Float()
    tax = Float()
    total_price = Float(required=True)
    coupon_code = String()
    placed_at = DateTime(required=True)


class OrderCancelled(BaseEvent):
    """An order was cancelled and its stock returned."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    reason = String()
    cancelled_by = Identifier()
    cancelled_at = DateTime(required=True)


class ShowcaseApprovalChanged(BaseEvent):
    """A product was approved for, or withdrawn from, the public showcase."""

    __version__ = 1

    product_id = Identifier(required=True)
    professional_id = Identifier(required=True)
    approved = Boolean(required=True)
    changed_by = Identifier(required=True)
    changed_at = DateTime(required=True)


class CouponCreated(BaseEvent):
    """An administrator created a coupon."""

    __version__ = 1

    coupon_id = Identifier(required=True)
    code = String(required=True)
    coupon_type = String(required=True)
    value = Float(required=True)
    created_by = Identifier()


class ReviewRemoved(BaseEvent):
    """An administrator took a review down."""

    __version__ = 1

    review_id = Identifier(required=True)
    target_id = Identifier(required=True)
    target_type = String(required=True)
    removed_by = Identifier(required=True)
    reason = String()
    removed_at = DateTime(required=True)
