from uuid import uuid4

import pytest
from protean import current_domain
from protean.integrations.pytest import DomainFixture


def unique_id(prefix):
    return f"{prefix}-{uuid4().hex[:8]}"


@pytest.fixture(scope="session")
def marketplace_bed():
    from marketplace.domain import marketplace

    bed = DomainFixture(marketplace)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(marketplace_bed):
    with marketplace_bed.domain_context():
        yield


@pytest.fixture(autouse=True)
def payout_gateway():
    """A fresh fake payout gateway per test."""
    from marketplace.payout import reset_gateway, set_gateway
    from marketplace.payout.fake_adapter import FakePayoutGateway

    gateway = FakePayoutGateway()
    set_gateway(gateway)
    yield gateway
    reset_gateway()


# ---------------------------------------------------------------------------
# Persisted test data
# ---------------------------------------------------------------------------
@pytest.fixture
def make_store():
    """Open and persist a store, optionally with one delivery zone."""
    from marketplace.store.store import Store

    def _make(professional_id=None, zone=None, **details):
        professional_id = professional_id or unique_id("pro")
        store = Store.open(professional_id=professional_id, business_name=f"Store of {professional_id}", **details)
        if zone:
            store.add_delivery_zone(**zone)
        current_domain.repository_for(Store).add(store)
        return store

    return _make


@pytest.fixture
def make_product():
    """Create and persist a product."""
    from marketplace.product.product import Product

    def _make(professional_id="pro-001", name="Ankara Wrap Dress", price=1000.0, stock_quantity=10, **details):
        product = Product.create(
            professional_id=professional_id,
            name=name,
            price=price,
            stock_quantity=stock_quantity,
            **details,
        )
        current_domain.repository_for(Product).add(product)
        return product

    return _make


@pytest.fixture
def make_address():
    """Record a customer's address in the delivery address projection."""
    from marketplace.projections.delivery_address import DeliveryAddress

    def _make(customer_id="cust-001", address_id=None):
        address_id = address_id or unique_id("addr")
        address = DeliveryAddress(
            address_id=address_id,
            customer_id=customer_id,
            address_type="Shipping",
            first_name="Wanjiru",
            last_name="Kamau",
            street="12 Moi Avenue",
            city="Nairobi",
            country="Kenya",
        )
        current_domain.repository_for(DeliveryAddress).add(address)
        return address

    return _make


@pytest.fixture
def make_coupon():
    """Create and persist a coupon valid around now."""
    from datetime import UTC, datetime, timedelta

    from marketplace.coupon.coupon import Coupon

    def _make(code=None, coupon_type="Percentage", value=10.0, **details):
        now = datetime.now(UTC)
        coupon = Coupon.create(
            code=code or unique_id("KARIBU"),
            coupon_type=coupon_type,
            value=value,
            valid_from=details.pop("valid_from", now - timedelta(days=1)),
            valid_until=details.pop("valid_until", now + timedelta(days=30)),
            **details,
        )
        current_domain.repository_for(Coupon).add(coupon)
        return coupon

    return _make
