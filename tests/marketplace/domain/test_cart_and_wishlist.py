import pytest
from marketplace.cart.cart import Cart
from marketplace.product.product import Product
from marketplace.wishlist.wishlist import Wishlist
from protean.exceptions import InvalidStateError, ObjectNotFoundError, ValidationError


@pytest.fixture
def kikoi():
    return Product.create(professional_id="pro-001", name="Kikoi Wrap", price=650.0, stock_quantity=3)


class TestCart:
    def test_cart_identity_is_customer_id(self):
        cart = Cart.for_customer("cust-001")
        assert cart.id == "cust-001"
        assert cart.customer_id == "cust-001"

    def test_same_variant_merges_into_one_line(self, kikoi):
        cart = Cart.for_customer("cust-001")
        first = cart.add_item(kikoi, 1, size="M", color="Red")
        second = cart.add_item(kikoi, 1, size="M", color="Red")
        assert first.id == second.id
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 2

    def test_different_variants_are_separate_lines(self, kikoi):
        cart = Cart.for_customer("cust-001")
        cart.add_item(kikoi, 1, size="M")
        cart.add_item(kikoi, 1, size="L")
        assert len(cart.items) == 2

    def test_merged_quantity_is_checked_against_stock(self, kikoi):
        cart = Cart.for_customer("cust-001")
        cart.add_item(kikoi, 2)
        with pytest.raises(ValidationError):
            cart.add_item(kikoi, 2)

    def test_inactive_product_cannot_be_added(self, kikoi):
        kikoi.deactivate()
        with pytest.raises(ValidationError):
            Cart.for_customer("cust-001").add_item(kikoi, 1)

    def test_update_quantity(self, kikoi):
        cart = Cart.for_customer("cust-001")
        item = cart.add_item(kikoi, 1)
        cart.update_quantity(item.id, 3, kikoi)
        assert cart.items[0].quantity == 3

    def test_update_quantity_validation(self, kikoi):
        cart = Cart.for_customer("cust-001")
        item = cart.add_item(kikoi, 1)
        with pytest.raises(ValidationError):
            cart.update_quantity(item.id, 0, kikoi)
        with pytest.raises(ValidationError):
            cart.update_quantity(item.id, 4, kikoi)

    def test_remove_unknown_item(self):
        with pytest.raises(ObjectNotFoundError):
            Cart.for_customer("cust-001").remove_item("nope")

    def test_remove_products_after_checkout(self, kikoi):
        other = Product.create(professional_id="pro-002", name="Sisal Bag", price=900.0, stock_quantity=1)
        cart = Cart.for_customer("cust-001")
        cart.add_item(kikoi, 1, size="M")
        cart.add_item(kikoi, 1, size="L")
        cart.add_item(other, 1)
        cart.remove_products([kikoi.id])
        assert [i.product_id for i in cart.items] == [other.id]


class TestWishlist:
    def test_add_and_remove(self, kikoi):
        wishlist = Wishlist.for_customer("cust-001")
        wishlist.add_product(kikoi)
        assert wishlist.contains(kikoi.id)
        wishlist.remove_product(kikoi.id)
        assert not wishlist.contains(kikoi.id)

    def test_duplicates_are_rejected(self, kikoi):
        wishlist = Wishlist.for_customer("cust-001")
        wishlist.add_product(kikoi)
        with pytest.raises(InvalidStateError):
            wishlist.add_product(kikoi)

    def test_out_of_stock_products_can_be_saved(self):
        sold_out = Product.create(professional_id="pro-001", name="Kanga", price=300.0, stock_quantity=0)
        wishlist = Wishlist.for_customer("cust-001")
        wishlist.add_product(sold_out)
        assert wishlist.contains(sold_out.id)

    def test_removing_missing_product(self):
        with pytest.raises(ObjectNotFoundError):
            Wishlist.for_customer("cust-001").remove_product("prod-x")
