"""Order aggregate: a customer's purchase from one or more vendors.

State Machine:
    PENDING → CONFIRMED → PROCESSING → SHIPPED → DELIVERED
    PENDING, CONFIRMED → CANCELLED → REFUNDED
    PROCESSING → CANCELLED (administrators only)

Once an order is Delivered the customer has a confirmation window to
acknowledge receipt. Vendor escrows are released after the customer confirms
or the window lapses.
"""

import json
from datetime import UTC, datetime, timedelta
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text, ValueObject
from shared.clock import as_utc

from marketplace.domain import marketplace
from marketplace.order.events import (
    DeliveryConfirmed,
    OrderCancelled,
    OrderPlaced,
    OrderStatusChanged,
    TrackingNumberAssigned,
)
from marketplace.order.pricing import round_money


class OrderStatus(Enum):
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"
    REFUNDED = "Refunded"


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.CONFIRMED, OrderStatus.CANCELLED},
    OrderStatus.CONFIRMED: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),
    OrderStatus.CANCELLED: {OrderStatus.REFUNDED},
    OrderStatus.REFUNDED: set(),
}

_CUSTOMER_CANCELLABLE_STATES = {OrderStatus.PENDING, OrderStatus.CONFIRMED}

# Administrators may also stop an order that is being prepared
_ADMIN_CANCELLABLE_STATES = {OrderStatus.PENDING, OrderStatus.CONFIRMED, OrderStatus.PROCESSING}


@marketplace.value_object(part_of="Order")
class ShippingAddress:
    """Where the order ships, copied from the customer's address book at checkout."""

    address_id = Identifier()
    first_name = String(required=True, max_length=100)
    last_name = String(required=True, max_length=100)
    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(max_length=100)
    zip_code = String(max_length=20)
    country = String(required=True, max_length=100)


@marketplace.value_object(part_of="Order")
class OrderPricing:
    subtotal = Float(default=0.0)
    shipping_cost = Float(default=0.0)
    discount = Float(default=0.0)
    tax = Float(default=0.0)
    total_price = Float(default=0.0)


@marketplace.entity(part_of="Order")
class OrderItem:
    """A purchased product, with name and price frozen at checkout."""

    product_id = Identifier(required=True)
    professional_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    size = String(max_length=20)
    color = String(max_length=50)
    notes = Text()

    @property
    def line_total(self) -> float:
        return round_money(self.unit_price * self.quantity)


@marketplace.aggregate
class Order:
    customer_id = Identifier(required=True)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    items = HasMany(OrderItem)
    vendors = Text()  # JSON array of the professional ids on the order
    shipping_address = ValueObject(ShippingAddress)
    pricing = ValueObject(OrderPricing)
    delivery_zone = String(max_length=100)
    coupon_code = String(max_length=50)
    tracking_number = String(max_length=100)
    notes = Text()
    actual_delivery = DateTime()
    confirmation_deadline = DateTime()
    delivery_confirmed_at = DateTime()
    cancellation_reason = String(max_length=500)
    cancelled_by = Identifier()
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, customer_id, quote, address, delivery_zone=None):
        """Create a Pending order from a priced quote.

        Args:
            customer_id: The customer placing the order.
            quote: A ``pricing.Quote`` for the requested lines.
            address: Dict with address_id, first_name, last_name, street,
                     city, state, zip_code, country.
            delivery_zone: The zone name shipping was priced for.
        """
        now = datetime.now(UTC)
        order = cls(
            customer_id=str(customer_id),
            shipping_address=ShippingAddress(**address),
            pricing=OrderPricing(
                subtotal=quote.subtotal,
                shipping_cost=quote.shipping_cost,
                discount=quote.discount,
                tax=quote.tax,
                total_price=quote.total_price,
            ),
            delivery_zone=delivery_zone,
            coupon_code=quote.coupon_code,
            created_at=now,
            updated_at=now,
        )
        for line in quote.lines:
            order.add_items(
                OrderItem(
                    product_id=line.product_id,
                    professional_id=line.professional_id,
                    product_name=line.product_name,
                    unit_price=line.unit_price,
                    quantity=line.quantity,
                    size=line.size,
                    color=line.color,
                    notes=line.notes,
                )
            )

        order.vendors = json.dumps(order.professional_ids)

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_id=str(customer_id),
                items=json.dumps(
                    [
                        {
                            "product_id": str(item.product_id),
                            "professional_id": str(item.professional_id),
                            "product_name": item.product_name,
                            "unit_price": item.unit_price,
                            "quantity": item.quantity,
                        }
                        for item in order.items
                    ]
                ),
                professional_ids=json.dumps(order.professional_ids),
                subtotal=quote.subtotal,
                shipping_cost=quote.shipping_cost,
                discount=quote.discount,
                tax=quote.tax,
                total_price=quote.total_price,
                coupon_code=quote.coupon_code,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def professional_ids(self) -> list[str]:
        return sorted({str(item.professional_id) for item in self.items})

    def involves_professional(self, professional_id) -> bool:
        return str(professional_id) in self.professional_ids

    @staticmethod
    def vendor_criteria(professional_id) -> dict:
        """Query filter for orders with at least one line sold by ``professional_id``."""
        return {"vendors__contains": json.dumps(str(professional_id))}

    def is_delivery_settled(self, as_of: datetime) -> bool:
        """Delivered and either confirmed by the customer or past the deadline."""
        if self.status != OrderStatus.DELIVERED.value:
            return False
        if self.delivery_confirmed_at is not None:
            return True
        return self.confirmation_deadline is not None and as_utc(as_of) >= as_utc(self.confirmation_deadline)

    # -------------------------------------------------------------------
    # State transitions
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    def _change_status(self, target_status, changed_by=None):
        previous = self.status
        now = datetime.now(UTC)
        self.status = target_status.value
        self.updated_at = now
        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous,
                new_status=target_status.value,
                changed_by=changed_by,
                changed_at=now,
            )
        )
        return now

    def advance_to(self, status, changed_by=None, confirmation_days=2):
        """Move the order along the fulfilment path (anything but cancellation)."""
        try:
            target = OrderStatus(status)
        except ValueError:
            raise ValidationError({"status": [f"Unknown order status: {status}"]})
        if target == OrderStatus.CANCELLED:
            raise ValidationError({"status": ["Use order cancellation to cancel an order"]})

        self._assert_can_transition(target)
        now = self._change_status(target, changed_by)

        if target == OrderStatus.DELIVERED:
            self.actual_delivery = now
            self.confirmation_deadline = now + timedelta(days=confirmation_days)

    def assign_tracking_number(self, tracking_number):
        self.tracking_number = tracking_number
        self.updated_at = datetime.now(UTC)
        self.raise_(TrackingNumberAssigned(order_id=str(self.id), tracking_number=tracking_number))

    def add_note(self, note):
        self.notes = f"{self.notes}\n{note}" if self.notes else note
        self.updated_at = datetime.now(UTC)

    def confirm_delivery(self, customer_id):
        if str(customer_id) != str(self.customer_id):
            raise ValidationError({"customer_id": ["Only the ordering customer can confirm delivery"]})
        if self.status != OrderStatus.DELIVERED.value:
            raise ValidationError({"status": ["Only delivered orders can be confirmed"]})
        if self.delivery_confirmed_at is not None:
            raise ValidationError({"status": ["Delivery already confirmed"]})

        now = datetime.now(UTC)
        self.delivery_confirmed_at = now
        self.updated_at = now
        self.raise_(DeliveryConfirmed(order_id=str(self.id), customer_id=str(self.customer_id), confirmed_at=now))

    def cancel(self, reason, cancelled_by, by_admin=False):
        current = OrderStatus(self.status)
        allowed = _ADMIN_CANCELLABLE_STATES if by_admin else _CUSTOMER_CANCELLABLE_STATES
        if current not in allowed:
            raise ValidationError({"status": [f"Cannot cancel an order that is {current.value}"]})

        previous = self.status
        now = datetime.now(UTC)
        self.status = OrderStatus.CANCELLED.value
        self.cancellation_reason = reason
        self.cancelled_by = cancelled_by
        self.updated_at = now
        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous,
                new_status=OrderStatus.CANCELLED.value,
                changed_by=cancelled_by,
                changed_at=now,
            )
        )
        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                customer_id=str(self.customer_id),
                reason=reason,
                cancelled_by=cancelled_by,
                cancelled_at=now,
            )
        )
