"""Collection aggregate: a curated, seasonal grouping of products."""

import re
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text

from marketplace.domain import marketplace

_EDITABLE_FIELDS = (
    "name",
    "description",
    "image_url",
    "category_id",
    "season",
    "is_featured",
    "display_order",
    "is_active",
)


class Season(Enum):
    SPRING = "Spring"
    SUMMER = "Summer"
    AUTUMN = "Autumn"
    WINTER = "Winter"
    ALL_SEASON = "All_Season"


def slugify(name: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", name.strip().lower()).strip("-")
    if not slug:
        raise ValidationError({"slug": [f"Cannot derive a slug from {name!r}"]})
    return slug


@marketplace.aggregate
class Collection:
    name = String(required=True, max_length=150)
    slug = String(required=True, max_length=160, unique=True)
    description = Text()
    image_url = String(max_length=500)
    category_id = Identifier()
    season = String(choices=Season, default=Season.ALL_SEASON.value)
    is_featured = Boolean(default=False)
    display_order = Integer(default=0)
    is_active = Boolean(default=True)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, name, slug=None, **details):
        now = datetime.now(UTC)
        return cls(
            name=name,
            slug=slugify(slug or name),
            created_at=now,
            updated_at=now,
            **{k: v for k, v in details.items() if k in _EDITABLE_FIELDS and v is not None},
        )

    def update_details(self, **changes):
        for field, value in changes.items():
            if field not in _EDITABLE_FIELDS:
                raise ValidationError({field: ["Field cannot be changed"]})
            if value is not None:
                setattr(self, field, value)
        self.updated_at = datetime.now(UTC)

    def deactivate(self):
        self.is_active = False
        self.updated_at = datetime.now(UTC)
