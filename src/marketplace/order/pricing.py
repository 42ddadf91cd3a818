"""Order pricing.

Turns the lines of a prospective order into a priced quote:

1. every line's product must be active and in stock, with enough units to
   cover the quantity requested across all lines for that product;
2. shipping is resolved line by line against the vendor's delivery zone of
   the requested name. The zone's ``free_delivery_above`` (or, when unset,
   the store's ``free_delivery_threshold``) waives the fee for lines whose
   total reaches it;
3. a redeemable coupon discounts the order;
4. tax is charged on the discounted subtotal;
5. ``total = subtotal + shipping + tax - discount``.

Amounts are accumulated unrounded and rounded to cents once, at the end.
Nothing here touches a repository: callers hand in the products, stores
and coupon they loaded.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from protean.exceptions import ValidationError

_CENT = Decimal("0.01")


def round_money(amount: float) -> float:
    return float(Decimal(str(amount)).quantize(_CENT, rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class LineRequest:
    product_id: str
    quantity: int
    size: str | None = None
    color: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class PricedLine:
    product_id: str
    professional_id: str
    product_name: str
    unit_price: float
    quantity: int
    line_total: float
    shipping_fee: float
    size: str | None = None
    color: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class Quote:
    lines: list[PricedLine] = field(default_factory=list)
    subtotal: float = 0.0
    shipping_cost: float = 0.0
    discount: float = 0.0
    tax: float = 0.0
    total_price: float = 0.0
    coupon_code: str | None = None

    def vendor_totals(self) -> dict[str, float]:
        """Merchandise value owed to each vendor, before shipping and tax."""
        totals: dict[str, float] = {}
        for line in self.lines:
            totals[line.professional_id] = totals.get(line.professional_id, 0.0) + line.line_total
        return {vendor: round_money(amount) for vendor, amount in totals.items()}


def shipping_fee(store, zone_name: str | None, line_total: float) -> float:
    """Delivery fee for one order line shipped by ``store`` to ``zone_name``.

    No fee applies when no zone was requested, when the vendor has no store,
    or when the store does not deliver to a zone of that exact name.
    """
    if not zone_name or store is None:
        return 0.0
    zone = store.zone_named(zone_name)
    if zone is None:
        return 0.0

    threshold = zone.free_delivery_above or store.free_delivery_threshold
    if not threshold or line_total < threshold:
        return zone.base_delivery_fee or 0.0
    return 0.0


def coupon_discount(coupon, subtotal: float, shipping_cost: float, now: datetime) -> float:
    """Discount granted by ``coupon``; zero when it cannot be redeemed."""
    if coupon is None or not coupon.is_redeemable(subtotal, now):
        return 0.0
    return coupon.discount_for(subtotal, shipping_cost)


def _check_available(product, product_id, requested: int):
    if product is None or not product.is_active or not product.is_in_stock:
        raise ValidationError({"items": [f"Product {product_id} is not available"]})
    if product.stock_quantity < requested:
        raise ValidationError({"items": [f"Insufficient stock for {product.name}"]})


def price_order(
    lines: list[LineRequest],
    products: Mapping,
    stores: Mapping,
    now: datetime,
    tax_rate: float,
    delivery_zone: str | None = None,
    coupon=None,
) -> Quote:
    """Price ``lines`` against current catalogue data.

    ``products`` maps product id to Product and ``stores`` maps professional
    id to Store. Raises ``ValidationError`` when a line cannot be fulfilled.
    """
    if not lines:
        raise ValidationError({"items": ["An order needs at least one item"]})

    requested: dict[str, int] = {}
    priced = []
    subtotal = 0.0
    shipping_cost = 0.0

    for line in lines:
        if line.quantity is None or line.quantity < 1:
            raise ValidationError({"items": ["Quantity must be at least 1"]})

        product_id = str(line.product_id)
        product = products.get(product_id)
        requested[product_id] = requested.get(product_id, 0) + line.quantity
        _check_available(product, product_id, requested[product_id])

        line_total = product.price * line.quantity
        fee = shipping_fee(stores.get(str(product.professional_id)), delivery_zone, line_total)
        subtotal += line_total
        shipping_cost += fee

        priced.append(
            PricedLine(
                product_id=product_id,
                professional_id=str(product.professional_id),
                product_name=product.name,
                unit_price=product.price,
                quantity=line.quantity,
                line_total=line_total,
                shipping_fee=fee,
                size=line.size,
                color=line.color,
                notes=line.notes,
            )
        )

    discount = coupon_discount(coupon, subtotal, shipping_cost, now)
    tax = (subtotal - discount) * tax_rate
    total_price = subtotal + shipping_cost + tax - discount

    return Quote(
        lines=priced,
        subtotal=round_money(subtotal),
        shipping_cost=round_money(shipping_cost),
        discount=round_money(discount),
        tax=round_money(tax),
        total_price=round_money(total_price),
        coupon_code=coupon.code if discount > 0 else None,
    )
