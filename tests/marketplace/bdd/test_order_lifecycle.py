"""BDD tests for the order lifecycle and escrow settlement."""

from datetime import UTC, datetime, timedelta

from marketplace.escrow.escrow import PaymentEscrow
from marketplace.order.order import Order, OrderStatus
from marketplace.order.pricing import PricedLine, Quote
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, scenarios, then, when

scenarios("features/order_lifecycle.feature")

_PATH = [OrderStatus.CONFIRMED, OrderStatus.PROCESSING, OrderStatus.SHIPPED, OrderStatus.DELIVERED]


@given(parsers.cfparse('a pending order for vendors "{first}" and "{second}"'), target_fixture="order")
def pending_order(first, second):
    quote = Quote(
        lines=[
            PricedLine("prod-1", first, "Batik Shirt", 1800.0, 1, 1800.0, 0.0),
            PricedLine("prod-2", second, "Woven Basket", 700.0, 2, 1400.0, 0.0),
        ],
        subtotal=3200.0,
        tax=512.0,
        total_price=3712.0,
    )
    address = {"first_name": "Halima", "last_name": "Said", "street": "Old Town", "city": "Lamu", "country": "Kenya"}
    order = Order.place("cust-bdd", quote, address)
    order._events.clear()
    return order


def _hold_escrows(order):
    return [
        PaymentEscrow.hold(order.id, professional_id, amount, hold_days=2, now=order.created_at)
        for professional_id, amount in {"pro-zuri": 1800.0, "pro-imara": 1400.0}.items()
    ]


@given(parsers.cfparse("the order has moved to {status}"))
def order_has_moved(order, status):
    for step in _PATH:
        order.advance_to(step.value)
        if step.value == status:
            break
    order._events.clear()


@when(parsers.cfparse("the order moves to {status}"))
def order_moves(order, status, error):
    try:
        order.advance_to(status, confirmation_days=2)
    except ValidationError as exc:
        error["exc"] = exc


@when("the customer cancels the order")
def customer_cancels(order, error):
    try:
        order.cancel("No longer needed", cancelled_by="cust-bdd")
    except ValidationError as exc:
        error["exc"] = exc


@when("an administrator cancels the order")
def admin_cancels(order):
    order.cancel("Vendor unavailable", cancelled_by="admin-bdd", by_admin=True)


@when("the customer confirms delivery")
def customer_confirms(order):
    order.confirm_delivery("cust-bdd")


@then(parsers.cfparse('the order status is "{status}"'))
def order_status_is(order, status):
    assert order.status == status


@then("the transition is rejected")
def transition_rejected(error):
    assert isinstance(error["exc"], ValidationError)


@then(parsers.cfparse("the customer has {days:d} days to confirm delivery"))
def confirmation_window(order, days):
    assert order.confirmation_deadline - order.actual_delivery == timedelta(days=days)


@then("the order is settled")
def order_settled(order):
    assert order.is_delivery_settled(datetime.now(UTC))


def _releasable(order, as_of):
    held = _hold_escrows(order)
    return all(e.is_due(as_of) for e in held) and order.is_delivery_settled(as_of)


@then(parsers.cfparse("the escrows are not releasable {days:d} day after delivery"))
def not_releasable(order, days):
    assert not _releasable(order, order.actual_delivery + timedelta(days=days))


@then(parsers.cfparse("the escrows are releasable {days:d} days after delivery"))
def releasable_after_delivery(order, days):
    assert _releasable(order, order.actual_delivery + timedelta(days=days))


@then(parsers.cfparse("the escrows are releasable {days:d} days after placement"))
def releasable_after_placement(order, days):
    assert _releasable(order, order.created_at + timedelta(days=days))
