"""Domain events for the Category aggregate."""

from protean.fields import Boolean, DateTime, Identifier, String

from marketplace.domain import marketplace


@marketplace.event(part_of="Category")
class CategoryCreated:
    __version__ = 1

    category_id = Identifier(required=True)
    name = String(required=True)
    slug = String(required=True)
    parent_id = Identifier()
    created_at = DateTime(required=True)


@marketplace.event(part_of="Category")
class CategoryUpdated:
    __version__ = 1

    category_id = Identifier(required=True)
    name = String(required=True)
    parent_id = Identifier()
    is_active = Boolean()
