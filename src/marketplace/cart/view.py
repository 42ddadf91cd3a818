"""Read model for the cart page: lines priced at today's prices."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from shared.clock import EPOCH, as_utc

from marketplace.cart.cart import Cart
from marketplace.order.pricing import round_money
from marketplace.product.product import Product
from marketplace.settings import tax_rate


def cart_view(customer_id) -> dict:
    """Return ``{"items": [...], "summary": {...}}`` for a customer's cart.

    Lines whose product has since been deleted are left out.
    """
    try:
        cart = current_domain.repository_for(Cart).get(str(customer_id))
    except ObjectNotFoundError:
        cart = None

    product_repo = current_domain.repository_for(Product)
    lines = []
    for item in sorted(cart.items if cart else [], key=lambda i: as_utc(i.added_at) or EPOCH):
        try:
            product = product_repo.get(item.product_id)
        except ObjectNotFoundError:
            continue
        lines.append(
            {
                "item_id": str(item.id),
                "product_id": str(product.id),
                "product_name": product.name,
                "unit_price": product.price,
                "quantity": item.quantity,
                "size": item.size,
                "color": item.color,
                "line_total": round_money(product.price * item.quantity),
                "is_available": product.is_available and product.stock_quantity >= item.quantity,
            }
        )

    subtotal = sum(line["unit_price"] * line["quantity"] for line in lines)
    return {
        "items": lines,
        "summary": {
            "item_count": sum(line["quantity"] for line in lines),
            "subtotal": round_money(subtotal),
            "estimated_total": round_money(subtotal * (1 + tax_rate())),
        },
    }
