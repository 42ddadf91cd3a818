"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, String, Text

from marketplace.domain import marketplace


@marketplace.event(part_of="Order")
class OrderPlaced:
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


@marketplace.event(part_of="Order")
class OrderStatusChanged:
    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_by = Identifier()
    changed_at = DateTime(required=True)


@marketplace.event(part_of="Order")
class TrackingNumberAssigned:
    __version__ = 1

    order_id = Identifier(required=True)
    tracking_number = String(required=True)


@marketplace.event(part_of="Order")
class DeliveryConfirmed:
    """The customer confirmed receipt, clearing the vendors' escrows for release."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    confirmed_at = DateTime(required=True)


@marketplace.event(part_of="Order")
class OrderCancelled:
    """An order was cancelled and its stock returned."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    reason = String()
    cancelled_by = Identifier()
    cancelled_at = DateTime(required=True)
