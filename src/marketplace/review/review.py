"""Review aggregate: a customer's star rating of a product or a professional.

State Machine:
    PUBLISHED → REMOVED (administrators only, terminal)

A review is verified when it cites a Delivered order of the reviewer's that
contains the reviewed product, or a line sold by the reviewed professional.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text

from marketplace.domain import marketplace
from marketplace.review.events import ReviewRemoved, ReviewSubmitted

MAX_IMAGES = 5


class ReviewTarget(Enum):
    PRODUCT = "Product"
    PROFESSIONAL = "Professional"


class ReviewStatus(Enum):
    PUBLISHED = "Published"
    REMOVED = "Removed"


@marketplace.aggregate
class Review:
    reviewer_id = Identifier(required=True)
    target_id = Identifier(required=True)
    target_type = String(required=True, choices=ReviewTarget)
    order_id = Identifier()
    rating = Integer(required=True)
    title = String(max_length=200)
    comment = Text()
    images = Text()  # JSON array of image URLs
    is_verified = Boolean(default=False)
    status = String(choices=ReviewStatus, default=ReviewStatus.PUBLISHED.value)
    removed_by = Identifier()
    removal_reason = String(max_length=500)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def rating_must_be_in_range(self):
        if self.rating is not None and not 1 <= self.rating <= 5:
            raise ValidationError({"rating": ["Rating must be between 1 and 5"]})

    @invariant.post
    def images_cannot_exceed_maximum(self):
        if len(self.image_urls) > MAX_IMAGES:
            raise ValidationError({"images": [f"Cannot attach more than {MAX_IMAGES} images to a review"]})

    @classmethod
    def submit(cls, reviewer_id, target_id, target_type, rating, title=None, comment=None, images=None,
               order_id=None, is_verified=False):
        now = datetime.now(UTC)
        review = cls(
            reviewer_id=str(reviewer_id),
            target_id=str(target_id),
            target_type=target_type,
            order_id=str(order_id) if order_id else None,
            rating=rating,
            title=title,
            comment=comment,
            images=json.dumps(list(images or [])),
            is_verified=is_verified,
            status=ReviewStatus.PUBLISHED.value,
            created_at=now,
            updated_at=now,
        )
        review.raise_(
            ReviewSubmitted(
                review_id=str(review.id),
                reviewer_id=str(reviewer_id),
                target_id=str(target_id),
                target_type=target_type,
                rating=rating,
                is_verified=is_verified,
                submitted_at=now,
            )
        )
        return review

    @property
    def image_urls(self) -> list[str]:
        return json.loads(self.images) if self.images else []

    @property
    def is_published(self) -> bool:
        return self.status == ReviewStatus.PUBLISHED.value

    def remove(self, removed_by, reason=None):
        if not self.is_published:
            raise ValidationError({"status": ["Review has already been removed"]})

        now = datetime.now(UTC)
        self.status = ReviewStatus.REMOVED.value
        self.removed_by = str(removed_by)
        self.removal_reason = reason
        self.updated_at = now
        self.raise_(
            ReviewRemoved(
                review_id=str(self.id),
                target_id=str(self.target_id),
                target_type=self.target_type,
                removed_by=str(removed_by),
                reason=reason,
                removed_at=now,
            )
        )
