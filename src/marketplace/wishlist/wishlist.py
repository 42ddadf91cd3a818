"""Wishlist aggregate: products a customer saved for later."""

from datetime import UTC, datetime

from protean.exceptions import InvalidStateError, ObjectNotFoundError, ValidationError
from protean.fields import DateTime, HasMany, Identifier

from marketplace.domain import marketplace


@marketplace.entity(part_of="Wishlist")
class WishlistItem:
    product_id = Identifier(required=True)
    added_at = DateTime()


@marketplace.aggregate
class Wishlist:
    """One per customer, identified by the customer's id."""

    customer_id = Identifier(required=True)
    items = HasMany(WishlistItem)

    @classmethod
    def for_customer(cls, customer_id):
        return cls(id=str(customer_id), customer_id=str(customer_id))

    def contains(self, product_id) -> bool:
        return any(str(i.product_id) == str(product_id) for i in self.items)

    def add_product(self, product):
        if not product.is_active:
            raise ValidationError({"product_id": ["Product is not available"]})
        if self.contains(product.id):
            raise InvalidStateError("Product already in wishlist")

        item = WishlistItem(product_id=str(product.id), added_at=datetime.now(UTC))
        self.add_items(item)
        return item

    def remove_product(self, product_id):
        item = next((i for i in self.items if str(i.product_id) == str(product_id)), None)
        if item is None:
            raise ObjectNotFoundError("Product not in wishlist")
        self.remove_items(item)
