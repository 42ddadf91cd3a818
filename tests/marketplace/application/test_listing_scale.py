"""Listings, counts and vendor scoping stay exact past a thousand records."""

from uuid import uuid4

import pytest
from marketplace.analytics.dashboard import dashboard_stats
from marketplace.order.order import Order
from marketplace.order.pricing import PricedLine, Quote
from marketplace.order.queries import order_query
from marketplace.product.catalogue import ProductFilter, browse_products
from marketplace.product.product import Product
from protean import current_domain
from shared.auth import Actor, Role
from shared.listing import everything, fetch_page

CATALOGUE_SIZE = 1005

ADDRESS = {
    "address_id": "addr-001",
    "first_name": "Njeri",
    "last_name": "Mwangi",
    "street": "8 Tom Mboya Street",
    "city": "Nairobi",
    "country": "Kenya",
}


@pytest.fixture
def large_catalogue():
    professional_id = f"pro-{uuid4().hex[:8]}"
    repo = current_domain.repository_for(Product)
    for index in range(CATALOGUE_SIZE):
        product = Product.create(
            professional_id=professional_id,
            name=f"Kitenge Shirt {index}",
            price=100.0 + index,
            stock_quantity=5,
        )
        product._events.clear()
        repo.add(product)
    return professional_id


def _place(customer_id, *professional_ids):
    lines = [
        PricedLine(f"prod-{uuid4().hex[:6]}", professional_id, "Beaded Necklace", 500.0, 1, 500.0, 0.0)
        for professional_id in professional_ids
    ]
    subtotal = 500.0 * len(lines)
    quote = Quote(lines=lines, subtotal=subtotal, total_price=subtotal)
    order = Order.place(customer_id, quote, ADDRESS)
    order._events.clear()
    current_domain.repository_for(Order).add(order)
    return order


class TestCatalogueBeyondAThousand:
    def test_pagination_reports_the_full_total(self, large_catalogue):
        items, pagination = browse_products(ProductFilter(professional_id=large_catalogue), page=84, limit=12)

        assert pagination == {"page": 84, "limit": 12, "total": CATALOGUE_SIZE, "pages": 84}
        assert len(items) == CATALOGUE_SIZE - 83 * 12

    def test_price_sort_reaches_the_most_expensive_product(self, large_catalogue):
        criteria = ProductFilter(professional_id=large_catalogue, sort_by="price", sort_order="desc")
        items, _ = browse_products(criteria, page=1, limit=1)

        assert items[0].price == 100.0 + CATALOGUE_SIZE - 1

    def test_dashboard_counts_every_product(self, large_catalogue):
        assert dashboard_stats()["products_count"] >= CATALOGUE_SIZE


class TestVendorScopedOrders:
    def test_professional_sees_orders_with_any_of_their_lines(self):
        vendor = f"pro-{uuid4().hex[:8]}"
        other = f"pro-{uuid4().hex[:8]}"
        own = _place("cust-001", vendor)
        mixed = _place("cust-002", other, vendor)
        _place("cust-003", other)

        orders = everything(order_query(Actor(user_id=vendor, role=Role.PROFESSIONAL.value)))
        assert {o.id for o in orders} == {own.id, mixed.id}

    def test_vendor_ids_do_not_match_by_prefix(self):
        vendor = f"pro-{uuid4().hex[:8]}"
        _place("cust-004", f"{vendor}-annex")

        _, pagination = fetch_page(order_query(Actor(user_id=vendor, role=Role.PROFESSIONAL.value)))
        assert pagination["total"] == 0
