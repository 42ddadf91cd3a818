"""Review reads and administrator removal."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain
from shared.listing import query

from marketplace.domain import marketplace
from marketplace.review.ratings import refresh_store_rating
from marketplace.review.review import Review, ReviewStatus


@marketplace.command(part_of="Review")
class RemoveReview:
    review_id = Identifier(required=True)
    removed_by = Identifier(required=True)
    reason = String(max_length=500)


@marketplace.command_handler(part_of=Review)
class RemoveReviewHandler:
    @handle(RemoveReview)
    def remove_review(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)
        review.remove(removed_by=command.removed_by, reason=command.reason)
        repo.add(review)
        refresh_store_rating(review)


def review_query(target_id=None, target_type=None, rating=None, reviewer_id=None):
    """Published reviews, newest first."""
    return query(
        Review,
        status=ReviewStatus.PUBLISHED.value,
        target_id=str(target_id) if target_id else None,
        target_type=target_type or None,
        rating=rating,
        reviewer_id=str(reviewer_id) if reviewer_id else None,
    ).order_by("-created_at")
