"""Cart line management: commands and handler."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from marketplace.cart.cart import Cart
from marketplace.domain import marketplace
from marketplace.product.product import Product


def load_cart(customer_id) -> Cart:
    """Fetch the customer's cart, starting an empty one on first use."""
    try:
        return current_domain.repository_for(Cart).get(str(customer_id))
    except ObjectNotFoundError:
        return Cart.for_customer(customer_id)


@marketplace.command(part_of="Cart")
class AddToCart:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(default=1)
    size = String(max_length=20)
    color = String(max_length=50)


@marketplace.command(part_of="Cart")
class UpdateCartItem:
    customer_id = Identifier(required=True)
    item_id = Identifier(required=True)
    quantity = Integer(required=True)


@marketplace.command(part_of="Cart")
class RemoveCartItem:
    customer_id = Identifier(required=True)
    item_id = Identifier(required=True)


@marketplace.command_handler(part_of=Cart)
class CartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        product_repo = current_domain.repository_for(Product)
        product = product_repo.get(command.product_id)

        cart = load_cart(command.customer_id)
        item = cart.add_item(
            product,
            quantity=command.quantity or 1,
            size=command.size,
            color=command.color,
        )
        product.record_cart_add()

        current_domain.repository_for(Cart).add(cart)
        product_repo.add(product)
        return str(item.id)

    @handle(UpdateCartItem)
    def update_cart_item(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get(command.customer_id)
        item = next((i for i in cart.items if str(i.id) == str(command.item_id)), None)
        if item is None:
            raise ObjectNotFoundError(f"Cart item {command.item_id} not found")

        product = current_domain.repository_for(Product).get(item.product_id)
        cart.update_quantity(command.item_id, command.quantity, product)
        repo.add(cart)

    @handle(RemoveCartItem)
    def remove_cart_item(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get(command.customer_id)
        cart.remove_item(command.item_id)
        repo.add(cart)
