"""PlaceOrder command + handler: checkout in a single unit of work.

Prices the requested lines, then records everything a purchase changes:
the order itself, each product's stock and sales count, the customer's
cart, one escrow per vendor and the coupon's usage. Any failure rolls the
whole checkout back.
"""

import json
from datetime import UTC, datetime

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace import settings
from marketplace.cart.cart import Cart
from marketplace.coupon.coupon import Coupon
from marketplace.coupon.management import find_coupon
from marketplace.domain import marketplace
from marketplace.escrow.escrow import PaymentEscrow
from marketplace.order.order import Order
from marketplace.order.pricing import LineRequest, price_order
from marketplace.product.product import Product
from marketplace.projections.delivery_address import DeliveryAddress
from marketplace.store.management import find_store_by_professional

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Order")
class PlaceOrder:
    """Buy the listed products and ship them to one of the customer's addresses."""

    customer_id = Identifier(required=True)
    address_id = Identifier(required=True)
    items = Text(required=True)  # JSON list of {product_id, quantity, size?, color?, notes?}
    delivery_zone = String(max_length=100)
    coupon_code = String(max_length=50)


def _parse_lines(raw) -> list[LineRequest]:
    try:
        entries = json.loads(raw)
    except (TypeError, ValueError):
        raise ValidationError({"items": ["Items must be a JSON list"]})
    if not isinstance(entries, list):
        raise ValidationError({"items": ["Items must be a JSON list"]})
    if any(not isinstance(entry, dict) or not entry.get("product_id") for entry in entries):
        raise ValidationError({"items": ["Every item needs a product_id"]})

    return [
        LineRequest(
            product_id=str(entry["product_id"]),
            quantity=int(entry.get("quantity", 1)),
            size=entry.get("size"),
            color=entry.get("color"),
            notes=entry.get("notes"),
        )
        for entry in entries
    ]


def _customer_address(customer_id, address_id) -> DeliveryAddress:
    try:
        address = current_domain.repository_for(DeliveryAddress).get(str(address_id))
    except ObjectNotFoundError:
        raise ValidationError({"address_id": ["Invalid address"]})
    if str(address.customer_id) != str(customer_id):
        raise ValidationError({"address_id": ["Invalid address"]})
    return address


def _load_products(lines) -> dict:
    repo = current_domain.repository_for(Product)
    products = {}
    for line in lines:
        if line.product_id in products:
            continue
        try:
            products[line.product_id] = repo.get(line.product_id)
        except ObjectNotFoundError:
            products[line.product_id] = None
    return products


def _load_stores(products) -> dict:
    stores = {}
    for product in products.values():
        if product is None:
            continue
        professional_id = str(product.professional_id)
        if professional_id not in stores:
            stores[professional_id] = find_store_by_professional(professional_id)
    return stores


@marketplace.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        now = datetime.now(UTC)
        address = _customer_address(command.customer_id, command.address_id)

        lines = _parse_lines(command.items)
        products = _load_products(lines)
        coupon = find_coupon(command.coupon_code)
        if command.coupon_code and coupon is None:
            logger.info("Unknown coupon ignored", coupon_code=command.coupon_code)

        quote = price_order(
            lines,
            products=products,
            stores=_load_stores(products),
            now=now,
            tax_rate=settings.tax_rate(),
            delivery_zone=command.delivery_zone,
            coupon=coupon,
        )

        order = Order.place(
            customer_id=command.customer_id,
            quote=quote,
            address=address.snapshot(),
            delivery_zone=command.delivery_zone,
        )

        # Take the sold units out of stock
        product_repo = current_domain.repository_for(Product)
        for line in quote.lines:
            products[line.product_id].take_stock(line.quantity)
        for product_id in {line.product_id for line in quote.lines}:
            product_repo.add(products[product_id])

        # Ordered products leave the cart
        cart_repo = current_domain.repository_for(Cart)
        try:
            cart = cart_repo.get(str(command.customer_id))
        except ObjectNotFoundError:
            cart = None
        if cart is not None:
            cart.remove_products(products.keys())
            cart_repo.add(cart)

        # Hold each vendor's share until delivery is settled
        escrow_repo = current_domain.repository_for(PaymentEscrow)
        for professional_id, amount in quote.vendor_totals().items():
            escrow_repo.add(
                PaymentEscrow.hold(
                    order_id=order.id,
                    professional_id=professional_id,
                    amount=amount,
                    hold_days=settings.escrow_hold_days(),
                    now=now,
                )
            )

        if quote.coupon_code:
            coupon.redeem(order.id)
            current_domain.repository_for(Coupon).add(coupon)
        elif coupon is not None:
            logger.info("Coupon not applicable", coupon_code=coupon.code, subtotal=quote.subtotal)

        current_domain.repository_for(Order).add(order)
        logger.info(
            "Order placed",
            order_id=str(order.id),
            customer_id=str(command.customer_id),
            total_price=quote.total_price,
        )
        return str(order.id)
