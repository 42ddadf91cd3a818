"""Application tests for checkout via domain.process()."""

import json
from uuid import uuid4

import pytest
from marketplace.cart.cart import Cart
from marketplace.cart.items import AddToCart
from marketplace.coupon.coupon import Coupon
from marketplace.escrow.escrow import EscrowStatus, PaymentEscrow
from marketplace.order.order import Order, OrderStatus
from marketplace.order.placement import PlaceOrder
from marketplace.product.product import Product
from protean import current_domain
from protean.exceptions import ValidationError
from shared.listing import everything, query


@pytest.fixture
def customer_id():
    return f"cust-{uuid4().hex[:8]}"


@pytest.fixture
def address(make_address, customer_id):
    return make_address(customer_id=customer_id)


def _place(customer_id, address_id, items, **overrides):
    command = PlaceOrder(
        customer_id=customer_id,
        address_id=address_id,
        items=json.dumps(items),
        **overrides,
    )
    return current_domain.process(command, asynchronous=False)


class TestPlaceOrder:
    def test_order_is_priced_and_persisted(self, customer_id, address, make_product):
        product = make_product(price=1000.0, stock_quantity=5)
        order_id = _place(customer_id, address.address_id, [{"product_id": product.id, "quantity": 2, "size": "M"}])

        order = current_domain.repository_for(Order).get(order_id)
        assert order.status == OrderStatus.PENDING.value
        assert order.pricing.subtotal == 2000.0
        assert order.pricing.tax == 320.0
        assert order.pricing.total_price == 2320.0
        assert order.shipping_address.first_name == "Wanjiru"
        assert order.items[0].size == "M"

    def test_stock_is_taken(self, customer_id, address, make_product):
        product = make_product(stock_quantity=3)
        _place(customer_id, address.address_id, [{"product_id": product.id, "quantity": 3}])

        refreshed = current_domain.repository_for(Product).get(product.id)
        assert refreshed.stock_quantity == 0
        assert refreshed.is_in_stock is False
        assert refreshed.sold_count == 3

    def test_shipping_uses_vendor_zone(self, customer_id, address, make_store, make_product):
        store = make_store(zone={"zone_name": "Nairobi CBD", "base_delivery_fee": 250.0, "free_delivery_above": 5000.0})
        product = make_product(professional_id=store.professional_id, price=1000.0)
        order_id = _place(
            customer_id,
            address.address_id,
            [{"product_id": product.id, "quantity": 1}],
            delivery_zone="Nairobi CBD",
        )

        order = current_domain.repository_for(Order).get(order_id)
        assert order.pricing.shipping_cost == 250.0
        assert order.delivery_zone == "Nairobi CBD"

    def test_one_escrow_per_vendor(self, customer_id, address, make_product):
        a = make_product(professional_id="pro-esc-a", price=500.0)
        b = make_product(professional_id="pro-esc-b", price=800.0)
        order_id = _place(
            customer_id,
            address.address_id,
            [
                {"product_id": a.id, "quantity": 2},
                {"product_id": b.id, "quantity": 1},
            ],
        )

        escrows = everything(query(PaymentEscrow, order_id=order_id))
        amounts = {e.professional_id: e.amount for e in escrows}
        assert amounts == {"pro-esc-a": 1000.0, "pro-esc-b": 800.0}
        assert all(e.status == EscrowStatus.HELD.value for e in escrows)

    def test_ordered_products_leave_the_cart(self, customer_id, address, make_product):
        ordered = make_product(name="Kitenge Skirt")
        kept = make_product(name="Beaded Necklace")
        for product in (ordered, kept):
            current_domain.process(
                AddToCart(customer_id=customer_id, product_id=product.id, quantity=1),
                asynchronous=False,
            )

        _place(customer_id, address.address_id, [{"product_id": ordered.id, "quantity": 1}])

        cart = current_domain.repository_for(Cart).get(customer_id)
        assert [item.product_id for item in cart.items] == [kept.id]

    def test_coupon_is_applied_and_redeemed(self, customer_id, address, make_product, make_coupon):
        coupon = make_coupon(value=10.0, usage_limit=5)
        product = make_product(price=1000.0)
        order_id = _place(
            customer_id,
            address.address_id,
            [{"product_id": product.id, "quantity": 1}],
            coupon_code=coupon.code.lower(),
        )

        order = current_domain.repository_for(Order).get(order_id)
        assert order.pricing.discount == 100.0
        assert order.coupon_code == coupon.code
        assert current_domain.repository_for(Coupon).get(coupon.id).used_count == 1

    def test_unknown_coupon_is_ignored(self, customer_id, address, make_product):
        product = make_product(price=1000.0)
        order_id = _place(
            customer_id,
            address.address_id,
            [{"product_id": product.id, "quantity": 1}],
            coupon_code="NO-SUCH-CODE",
        )

        order = current_domain.repository_for(Order).get(order_id)
        assert order.pricing.discount == 0.0
        assert order.coupon_code is None

    def test_unmet_minimum_leaves_coupon_unused(self, customer_id, address, make_product, make_coupon):
        coupon = make_coupon(min_order_amount=10000.0)
        product = make_product(price=1000.0)
        _place(customer_id, address.address_id, [{"product_id": product.id, "quantity": 1}], coupon_code=coupon.code)

        assert current_domain.repository_for(Coupon).get(coupon.id).used_count == 0


class TestPlaceOrderRejections:
    def test_address_must_belong_to_customer(self, make_address, make_product, customer_id):
        someone_else = make_address(customer_id="cust-other")
        product = make_product()
        with pytest.raises(ValidationError) as exc:
            _place(customer_id, someone_else.address_id, [{"product_id": product.id, "quantity": 1}])
        assert exc.value.messages["address_id"] == ["Invalid address"]

    def test_unknown_address(self, make_product, customer_id):
        product = make_product()
        with pytest.raises(ValidationError):
            _place(customer_id, "addr-missing", [{"product_id": product.id, "quantity": 1}])

    def test_items_must_be_a_list(self, customer_id, address):
        with pytest.raises(ValidationError):
            current_domain.process(
                PlaceOrder(customer_id=customer_id, address_id=address.address_id, items='{"product_id": "x"}'),
                asynchronous=False,
            )

    def test_items_need_product_ids(self, customer_id, address):
        with pytest.raises(ValidationError):
            _place(customer_id, address.address_id, [{"quantity": 1}])

    def test_insufficient_stock_changes_nothing(self, customer_id, address, make_product):
        product = make_product(stock_quantity=1)
        with pytest.raises(ValidationError):
            _place(customer_id, address.address_id, [{"product_id": product.id, "quantity": 2}])

        assert current_domain.repository_for(Product).get(product.id).stock_quantity == 1
        assert everything(query(Order, customer_id=customer_id)) == []

    def test_missing_product(self, customer_id, address):
        with pytest.raises(ValidationError) as exc:
            _place(customer_id, address.address_id, [{"product_id": "prod-missing", "quantity": 1}])
        assert "not available" in exc.value.messages["items"][0]
