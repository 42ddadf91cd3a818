"""Product aggregate: a vendor's listing with stock and engagement counters."""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String, Text

from marketplace.domain import marketplace
from marketplace.product.events import (
    ProductCreated,
    ProductDeactivated,
    ProductRestocked,
    ProductUpdated,
    ShowcaseApprovalChanged,
)

_LIST_FIELDS = ("sizes", "colors", "tags")
_EDITABLE_FIELDS = (
    "name",
    "description",
    "price",
    "category_id",
    "collection_id",
    "gender",
    "material",
    "is_active",
) + _LIST_FIELDS


class Gender(Enum):
    MEN = "Men"
    WOMEN = "Women"
    UNISEX = "Unisex"
    KIDS = "Kids"


@marketplace.aggregate
class Product:
    professional_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    description = Text()
    price = Float(required=True, min_value=0.0)
    stock_quantity = Integer(default=0, min_value=0)
    is_active = Boolean(default=True)
    is_in_stock = Boolean(default=False)
    category_id = Identifier()
    collection_id = Identifier()
    sizes = Text()  # JSON array
    colors = Text()  # JSON array
    tags = Text()  # JSON array
    gender = String(choices=Gender, default=Gender.UNISEX.value)
    material = String(max_length=100)
    view_count = Integer(default=0, min_value=0)
    wishlist_count = Integer(default=0, min_value=0)
    cart_count = Integer(default=0, min_value=0)
    sold_count = Integer(default=0, min_value=0)
    is_showcase_approved = Boolean(default=False)
    approved_at = DateTime()
    approved_by = Identifier()
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def stock_flag_follows_quantity(self):
        if bool(self.is_in_stock) != (self.stock_quantity > 0):
            raise ValidationError({"is_in_stock": ["Stock flag out of sync with stock quantity"]})

    @classmethod
    def create(cls, professional_id, name, price, stock_quantity=0, sizes=None, colors=None, tags=None, **details):
        now = datetime.now(UTC)
        product = cls(
            professional_id=professional_id,
            name=name,
            price=price,
            stock_quantity=stock_quantity,
            is_in_stock=stock_quantity > 0,
            sizes=json.dumps(list(sizes or [])),
            colors=json.dumps(list(colors or [])),
            tags=json.dumps(list(tags or [])),
            created_at=now,
            updated_at=now,
            **{k: v for k, v in details.items() if k in _EDITABLE_FIELDS and v is not None},
        )
        product.raise_(
            ProductCreated(
                product_id=str(product.id),
                professional_id=str(professional_id),
                name=name,
                price=price,
                stock_quantity=stock_quantity,
                created_at=now,
            )
        )
        return product

    # -------------------------------------------------------------------
    # JSON list accessors
    # -------------------------------------------------------------------
    @property
    def size_list(self) -> list:
        return json.loads(self.sizes) if self.sizes else []

    @property
    def color_list(self) -> list:
        return json.loads(self.colors) if self.colors else []

    @property
    def tag_list(self) -> list:
        return json.loads(self.tags) if self.tags else []

    @property
    def is_available(self) -> bool:
        return bool(self.is_active and self.is_in_stock)

    # -------------------------------------------------------------------
    # Catalogue maintenance
    # -------------------------------------------------------------------
    def update_details(self, **changes):
        for field, value in changes.items():
            if field not in _EDITABLE_FIELDS:
                raise ValidationError({field: ["Field cannot be changed"]})
            if value is None:
                continue
            if field in _LIST_FIELDS:
                value = json.dumps(list(value))
            setattr(self, field, value)

        self.updated_at = datetime.now(UTC)
        self.raise_(
            ProductUpdated(
                product_id=str(self.id),
                name=self.name,
                price=self.price,
                is_active=self.is_active,
            )
        )

    def _set_stock(self, quantity):
        with atomic_change(self):
            self.stock_quantity = quantity
            self.is_in_stock = quantity > 0
        self.updated_at = datetime.now(UTC)

    def restock(self, quantity):
        if quantity is None or quantity <= 0:
            raise ValidationError({"quantity": ["Restock quantity must be positive"]})

        self._set_stock(self.stock_quantity + quantity)
        self.raise_(
            ProductRestocked(
                product_id=str(self.id),
                quantity_added=quantity,
                stock_quantity=self.stock_quantity,
            )
        )

    def take_stock(self, quantity):
        """Remove sold units from stock."""
        if quantity > self.stock_quantity:
            raise ValidationError({"stock_quantity": [f"Insufficient stock for {self.name}"]})
        self._set_stock(self.stock_quantity - quantity)
        self.sold_count = (self.sold_count or 0) + quantity

    def return_stock(self, quantity):
        """Put units from a cancelled order back on the shelf."""
        self._set_stock(self.stock_quantity + quantity)
        self.sold_count = max((self.sold_count or 0) - quantity, 0)

    def deactivate(self):
        if not self.is_active:
            return
        self.is_active = False
        now = datetime.now(UTC)
        self.updated_at = now
        self.raise_(ProductDeactivated(product_id=str(self.id), deactivated_at=now))

    def set_showcase_approval(self, approved, changed_by):
        now = datetime.now(UTC)
        self.is_showcase_approved = bool(approved)
        self.approved_at = now if approved else None
        self.approved_by = changed_by if approved else None
        self.updated_at = now
        self.raise_(
            ShowcaseApprovalChanged(
                product_id=str(self.id),
                professional_id=str(self.professional_id),
                approved=bool(approved),
                changed_by=changed_by,
                changed_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Engagement counters
    # -------------------------------------------------------------------
    def record_view(self):
        self.view_count = (self.view_count or 0) + 1

    def record_cart_add(self):
        self.cart_count = (self.cart_count or 0) + 1

    def record_wishlist_add(self):
        self.wishlist_count = (self.wishlist_count or 0) + 1

    def record_wishlist_remove(self):
        self.wishlist_count = max((self.wishlist_count or 0) - 1, 0)
