"""Domain events for the Review aggregate."""

from protean.fields import Boolean, DateTime, Identifier, Integer, String

from marketplace.domain import marketplace


@marketplace.event(part_of="Review")
class ReviewSubmitted:
    """A customer rated a product or a professional."""

    __version__ = 1

    review_id = Identifier(required=True)
    reviewer_id = Identifier(required=True)
    target_id = Identifier(required=True)
    target_type = String(required=True)
    rating = Integer(required=True)
    is_verified = Boolean(default=False)
    submitted_at = DateTime(required=True)


@marketplace.event(part_of="Review")
class ReviewRemoved:
    """An administrator took a review down."""

    __version__ = 1

    review_id = Identifier(required=True)
    target_id = Identifier(required=True)
    target_type = String(required=True)
    removed_by = Identifier(required=True)
    reason = String()
    removed_at = DateTime(required=True)
