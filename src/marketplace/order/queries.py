"""Order read access, scoped by who is asking.

Customers see their own orders, professionals see orders containing at
least one of their products, administrators see everything.
"""

from shared.auth import Actor
from shared.listing import query

from marketplace.order.order import Order


def can_view(order: Order, actor: Actor) -> bool:
    if actor.is_admin:
        return True
    if str(order.customer_id) == actor.user_id:
        return True
    return actor.is_professional and order.involves_professional(actor.user_id)


def can_manage(order: Order, actor: Actor) -> bool:
    """Whether ``actor`` may update the order's fulfilment status."""
    return actor.is_admin or (actor.is_professional and order.involves_professional(actor.user_id))


def can_cancel(order: Order, actor: Actor) -> bool:
    """Only the ordering customer or an administrator may cancel."""
    return actor.is_admin or str(order.customer_id) == actor.user_id


def order_query(actor: Actor, status: str | None = None):
    """Orders the actor may see, newest first."""
    if actor.is_admin:
        scope = {}
    elif actor.is_professional:
        scope = Order.vendor_criteria(actor.user_id)
    else:
        scope = {"customer_id": actor.user_id}
    return query(Order, status=status or None, **scope).order_by("-created_at")
