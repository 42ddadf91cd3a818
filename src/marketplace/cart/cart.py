"""Cart aggregate: the products a customer intends to buy.

A customer has a single cart whose identity is the customer's id, so it can
be fetched without a lookup. Lines are unique per (product, size, color);
adding the same combination again grows the existing line.
"""

from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String

from marketplace.cart.events import CartItemAdded, CartItemQuantityUpdated, CartItemRemoved
from marketplace.domain import marketplace


@marketplace.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    size = String(max_length=20)
    color = String(max_length=50)
    added_at = DateTime()


def _ensure_stock(product, quantity):
    if not product.is_available:
        raise ValidationError({"product_id": [f"Product {product.id} is not available"]})
    if product.stock_quantity < quantity:
        raise ValidationError({"quantity": [f"Insufficient stock for {product.name}"]})


@marketplace.aggregate
class Cart:
    customer_id = Identifier(required=True)
    items = HasMany(CartItem)
    updated_at = DateTime()

    @classmethod
    def for_customer(cls, customer_id):
        return cls(id=str(customer_id), customer_id=str(customer_id), updated_at=datetime.now(UTC))

    def _line(self, item_id):
        item = next((i for i in self.items if str(i.id) == str(item_id)), None)
        if item is None:
            raise ObjectNotFoundError(f"Cart item {item_id} not found")
        return item

    def add_item(self, product, quantity=1, size=None, color=None):
        """Add ``quantity`` of ``product``, merging into a matching line."""
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        existing = next(
            (
                i
                for i in self.items
                if str(i.product_id) == str(product.id) and i.size == size and i.color == color
            ),
            None,
        )
        _ensure_stock(product, quantity + (existing.quantity if existing else 0))

        if existing:
            existing.quantity += quantity
            item = existing
        else:
            item = CartItem(
                product_id=str(product.id),
                quantity=quantity,
                size=size,
                color=color,
                added_at=datetime.now(UTC),
            )
            self.add_items(item)

        self.updated_at = datetime.now(UTC)
        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                item_id=str(item.id),
                product_id=str(product.id),
                quantity=quantity,
                size=size,
                color=color,
            )
        )
        return item

    def update_quantity(self, item_id, quantity, product):
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        item = self._line(item_id)
        _ensure_stock(product, quantity)

        previous = item.quantity
        item.quantity = quantity
        self.updated_at = datetime.now(UTC)
        self.raise_(
            CartItemQuantityUpdated(
                cart_id=str(self.id),
                item_id=str(item.id),
                previous_quantity=previous,
                new_quantity=quantity,
            )
        )

    def remove_item(self, item_id):
        item = self._line(item_id)
        self.remove_items(item)
        self.updated_at = datetime.now(UTC)
        self.raise_(CartItemRemoved(cart_id=str(self.id), item_id=str(item.id), product_id=str(item.product_id)))

    def remove_products(self, product_ids):
        """Drop every line for the given products (used after checkout)."""
        wanted = {str(p) for p in product_ids}
        for item in [i for i in self.items if str(i.product_id) in wanted]:
            self.remove_items(item)
        self.updated_at = datetime.now(UTC)
