"""Wishlist management: commands and handler.

Adding and removing keeps the product's ``wishlist_count`` in step.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.product.product import Product
from marketplace.wishlist.wishlist import Wishlist


def load_wishlist(customer_id) -> Wishlist:
    try:
        return current_domain.repository_for(Wishlist).get(str(customer_id))
    except ObjectNotFoundError:
        return Wishlist.for_customer(customer_id)


@marketplace.command(part_of="Wishlist")
class AddToWishlist:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)


@marketplace.command(part_of="Wishlist")
class RemoveFromWishlist:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)


@marketplace.command_handler(part_of=Wishlist)
class WishlistHandler:
    @handle(AddToWishlist)
    def add_to_wishlist(self, command):
        product_repo = current_domain.repository_for(Product)
        product = product_repo.get(command.product_id)

        wishlist = load_wishlist(command.customer_id)
        wishlist.add_product(product)
        product.record_wishlist_add()

        current_domain.repository_for(Wishlist).add(wishlist)
        product_repo.add(product)

    @handle(RemoveFromWishlist)
    def remove_from_wishlist(self, command):
        wishlist = load_wishlist(command.customer_id)
        wishlist.remove_product(command.product_id)
        current_domain.repository_for(Wishlist).add(wishlist)

        product_repo = current_domain.repository_for(Product)
        try:
            product = product_repo.get(command.product_id)
        except ObjectNotFoundError:
            return
        product.record_wishlist_remove()
        product_repo.add(product)
