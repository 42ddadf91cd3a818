"""Category aggregate: a node in the storefront's category tree.

Top-level categories have no parent. The tree has no depth limit, but a
category may never sit beneath one of its own descendants.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text

from marketplace.category.events import CategoryCreated, CategoryUpdated
from marketplace.collection.collection import slugify
from marketplace.domain import marketplace

_EDITABLE_FIELDS = (
    "name",
    "description",
    "image_url",
    "parent_id",
    "display_order",
    "is_active",
)


@marketplace.aggregate
class Category:
    name = String(required=True, max_length=100)
    slug = String(required=True, max_length=120, unique=True)
    description = Text()
    image_url = String(max_length=500)
    parent_id = Identifier()
    display_order = Integer(default=0)
    is_active = Boolean(default=True)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, name, slug=None, parent_id=None, **details):
        now = datetime.now(UTC)
        category = cls(
            name=name,
            slug=slugify(slug or name),
            parent_id=parent_id,
            created_at=now,
            updated_at=now,
            **{k: v for k, v in details.items() if k in _EDITABLE_FIELDS and v is not None},
        )
        category.raise_(
            CategoryCreated(
                category_id=str(category.id),
                name=category.name,
                slug=category.slug,
                parent_id=str(parent_id) if parent_id else None,
                created_at=now,
            )
        )
        return category

    @property
    def is_top_level(self) -> bool:
        return not self.parent_id

    def update_details(self, **changes):
        for field, value in changes.items():
            if field not in _EDITABLE_FIELDS:
                raise ValidationError({field: ["Field cannot be changed"]})
            if value is not None:
                setattr(self, field, value)
        if self.parent_id and str(self.parent_id) == str(self.id):
            raise ValidationError({"parent_id": ["A category cannot be its own parent"]})

        self.updated_at = datetime.now(UTC)
        self.raise_(
            CategoryUpdated(
                category_id=str(self.id),
                name=self.name,
                parent_id=str(self.parent_id) if self.parent_id else None,
                is_active=bool(self.is_active),
            )
        )

    def move_to_top_level(self):
        self.parent_id = None
        self.updated_at = datetime.now(UTC)
