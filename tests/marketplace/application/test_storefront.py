"""Application tests for carts, wishlists and the storefront listings."""

from uuid import uuid4

import pytest
from marketplace.cart.cart import Cart
from marketplace.cart.items import AddToCart, RemoveCartItem, UpdateCartItem
from marketplace.cart.view import cart_view
from marketplace.collection.browsing import list_collections
from marketplace.collection.collection import Collection
from marketplace.product.catalogue import ProductFilter, browse_products, showcase_query
from marketplace.product.product import Product
from marketplace.store.directory import store_query
from marketplace.store.store import Store
from marketplace.wishlist.items import AddToWishlist, RemoveFromWishlist
from marketplace.wishlist.wishlist import Wishlist
from protean import current_domain
from protean.exceptions import InvalidStateError, ObjectNotFoundError
from shared.listing import everything


def _process(command):
    return current_domain.process(command, asynchronous=False)


@pytest.fixture
def customer_id():
    return f"cust-{uuid4().hex[:8]}"


class TestCart:
    def test_add_creates_cart_and_counts_product(self, customer_id, make_product):
        product = make_product()
        item_id = _process(AddToCart(customer_id=customer_id, product_id=product.id, quantity=2, size="M"))

        cart = current_domain.repository_for(Cart).get(customer_id)
        assert str(cart.items[0].id) == item_id
        assert current_domain.repository_for(Product).get(product.id).cart_count == 1

    def test_update_and_remove(self, customer_id, make_product):
        product = make_product(stock_quantity=5)
        item_id = _process(AddToCart(customer_id=customer_id, product_id=product.id))

        _process(UpdateCartItem(customer_id=customer_id, item_id=item_id, quantity=4))
        assert current_domain.repository_for(Cart).get(customer_id).items[0].quantity == 4

        _process(RemoveCartItem(customer_id=customer_id, item_id=item_id))
        assert current_domain.repository_for(Cart).get(customer_id).items == []

    def test_update_unknown_item(self, customer_id, make_product):
        product = make_product()
        _process(AddToCart(customer_id=customer_id, product_id=product.id))
        with pytest.raises(ObjectNotFoundError):
            _process(UpdateCartItem(customer_id=customer_id, item_id="item-x", quantity=2))

    def test_cart_view_prices_lines(self, customer_id, make_product):
        product = make_product(price=500.0, stock_quantity=3)
        _process(AddToCart(customer_id=customer_id, product_id=product.id, quantity=2))

        view = cart_view(customer_id)
        assert view["items"][0]["line_total"] == 1000.0
        assert view["items"][0]["is_available"] is True
        assert view["summary"] == {"item_count": 2, "subtotal": 1000.0, "estimated_total": 1160.0}

    def test_empty_cart_view(self, customer_id):
        assert cart_view(customer_id) == {
            "items": [],
            "summary": {"item_count": 0, "subtotal": 0.0, "estimated_total": 0.0},
        }


class TestWishlist:
    def test_add_and_remove(self, customer_id, make_product):
        product = make_product()
        _process(AddToWishlist(customer_id=customer_id, product_id=product.id))
        assert current_domain.repository_for(Wishlist).get(customer_id).contains(product.id)
        assert current_domain.repository_for(Product).get(product.id).wishlist_count == 1

        _process(RemoveFromWishlist(customer_id=customer_id, product_id=product.id))
        assert not current_domain.repository_for(Wishlist).get(customer_id).contains(product.id)
        assert current_domain.repository_for(Product).get(product.id).wishlist_count == 0

    def test_duplicate_add(self, customer_id, make_product):
        product = make_product()
        _process(AddToWishlist(customer_id=customer_id, product_id=product.id))
        with pytest.raises(InvalidStateError):
            _process(AddToWishlist(customer_id=customer_id, product_id=product.id))


class TestListings:
    def test_browse_filters_by_vendor_price_and_size(self, make_product):
        professional_id = f"pro-{uuid4().hex[:8]}"
        cheap = make_product(professional_id=professional_id, price=300.0, sizes=["S"])
        make_product(professional_id=professional_id, price=900.0, sizes=["S"])
        make_product(professional_id=professional_id, price=250.0, sizes=["XL"])

        found, _ = browse_products(ProductFilter(professional_id=professional_id, max_price=500.0, sizes=["S"]))
        assert [p.id for p in found] == [cheap.id]

    def test_browse_skips_unavailable_and_sorts(self, make_product):
        professional_id = f"pro-{uuid4().hex[:8]}"
        low = make_product(professional_id=professional_id, price=100.0)
        high = make_product(professional_id=professional_id, price=200.0)
        make_product(professional_id=professional_id, price=150.0, stock_quantity=0)

        found, _ = browse_products(ProductFilter(professional_id=professional_id, sort_by="price", sort_order="asc"))
        assert [p.id for p in found] == [low.id, high.id]

    def test_search_matches_name_and_description(self, make_product):
        marker = uuid4().hex[:8]
        match = make_product(name="Plain Shirt", description=f"woven {marker} cotton")
        found, _ = browse_products(ProductFilter(search=marker.upper()))
        assert [p.id for p in found] == [match.id]

    def test_showcase_contains_only_approved_available_products(self, make_product):
        approved = make_product()
        approved.set_showcase_approval(True, changed_by="super-1")
        current_domain.repository_for(Product).add(approved)
        sold_out = make_product(stock_quantity=0)
        sold_out.set_showcase_approval(True, changed_by="super-1")
        current_domain.repository_for(Product).add(sold_out)

        ids = [p.id for p in everything(showcase_query())]
        assert approved.id in ids
        assert sold_out.id not in ids

    def test_collections_preview_their_products(self, make_product):
        collection = Collection.create(name=f"Coastal {uuid4().hex[:6]}", is_featured=True)
        current_domain.repository_for(Collection).add(collection)
        product = make_product(collection_id=collection.id)

        entry = next(e for e in list_collections(featured=True) if e["collection"].id == collection.id)
        assert entry["product_count"] == 1
        assert entry["products"][0].id == product.id

    def test_store_directory(self, make_store):
        town = f"Town{uuid4().hex[:6]}"
        plain = make_store(location=f"{town} East")
        verified = make_store(location=town)
        verified.verify("admin-1")
        current_domain.repository_for(Store).add(verified)

        stores = everything(store_query(location=town.lower()))
        assert [s.id for s in stores] == [verified.id, plain.id]
        assert [s.id for s in everything(store_query(location=town, verified=False))] == [plain.id]
