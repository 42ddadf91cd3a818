"""Shared BDD fixtures and step definitions for the Marketplace domain."""

from datetime import UTC, datetime, timedelta

import pytest
from marketplace.coupon.coupon import Coupon
from marketplace.order.pricing import LineRequest, price_order
from marketplace.product.product import Product
from marketplace.store.store import Store
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then, when

NOW = datetime(2026, 7, 1, 12, 0, tzinfo=UTC)
TAX_RATE = 0.16


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


@pytest.fixture()
def catalogue():
    """Products by name, stores by professional and the coupon in play."""
    return {"products": {}, "stores": {}, "coupon": None}


@pytest.fixture()
def basket():
    return []


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('vendor "{vendor}" sells "{name}" at {price:g} with {stock:d} in stock'))
def vendor_sells(catalogue, vendor, name, price, stock):
    product = Product.create(professional_id=vendor, name=name, price=price, stock_quantity=stock)
    product._events.clear()
    catalogue["products"][name] = product


@given(parsers.cfparse('vendor "{vendor}" delivers to "{zone}" for {fee:g}'))
def vendor_delivers(catalogue, vendor, zone, fee):
    store = catalogue["stores"].get(vendor) or Store.open(professional_id=vendor, business_name=f"{vendor} Studio")
    store.add_delivery_zone(zone_name=zone, base_delivery_fee=fee)
    catalogue["stores"][vendor] = store


@given(parsers.cfparse('vendor "{vendor}" delivers to "{zone}" for {fee:g}, free above {threshold:g}'))
def vendor_delivers_with_threshold(catalogue, vendor, zone, fee, threshold):
    store = catalogue["stores"].get(vendor) or Store.open(professional_id=vendor, business_name=f"{vendor} Studio")
    store.add_delivery_zone(zone_name=zone, base_delivery_fee=fee, free_delivery_above=threshold)
    catalogue["stores"][vendor] = store


@given(parsers.cfparse('a {coupon_type} coupon "{code}" worth {value:g}'))
def coupon_worth(catalogue, coupon_type, code, value):
    catalogue["coupon"] = Coupon.create(
        code=code,
        coupon_type=coupon_type,
        value=value,
        valid_from=NOW - timedelta(days=1),
        valid_until=NOW + timedelta(days=1),
    )


@given(parsers.cfparse("the coupon requires a minimum order of {amount:g}"))
def coupon_minimum(catalogue, amount):
    catalogue["coupon"].min_order_amount = amount


@given(parsers.cfparse("the coupon discount is capped at {amount:g}"))
def coupon_cap(catalogue, amount):
    catalogue["coupon"].max_discount = amount


@given(parsers.cfparse('the customer wants {quantity:d} of "{name}"'))
def customer_wants(catalogue, basket, quantity, name):
    basket.append(LineRequest(product_id=str(catalogue["products"][name].id), quantity=quantity))


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
def _price(catalogue, basket, zone=None):
    return price_order(
        basket,
        products={str(p.id): p for p in catalogue["products"].values()},
        stores=catalogue["stores"],
        now=NOW,
        tax_rate=TAX_RATE,
        delivery_zone=zone,
        coupon=catalogue["coupon"],
    )


@when("the order is priced", target_fixture="quote")
def order_is_priced(catalogue, basket, error):
    try:
        return _price(catalogue, basket)
    except ValidationError as exc:
        error["exc"] = exc
        return None


@when(parsers.cfparse('the order is priced for delivery to "{zone}"'), target_fixture="quote")
def order_is_priced_for_zone(catalogue, basket, error, zone):
    try:
        return _price(catalogue, basket, zone=zone)
    except ValidationError as exc:
        error["exc"] = exc
        return None


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the {figure} is {amount:g}"))
def figure_is(quote, figure, amount):
    attribute = {
        "subtotal": "subtotal",
        "shipping cost": "shipping_cost",
        "discount": "discount",
        "tax": "tax",
        "total": "total_price",
    }[figure]
    assert getattr(quote, attribute) == pytest.approx(amount)


@then(parsers.cfparse('the order is rejected with "{message}"'))
def order_rejected(error, message):
    assert error["exc"] is not None
    assert message in error["exc"].messages["items"][0]
