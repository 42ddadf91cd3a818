"""SubmitReview: rate a product or a professional.

One published review per reviewer per target. Citing a Delivered order of
the reviewer's that covers the target marks the review verified.
"""

import json

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain
from shared.listing import count, query

from marketplace.domain import marketplace
from marketplace.order.order import Order, OrderStatus
from marketplace.product.product import Product
from marketplace.review.ratings import refresh_store_rating
from marketplace.review.review import Review, ReviewStatus, ReviewTarget
from marketplace.store.store import Store


@marketplace.command(part_of="Review")
class SubmitReview:
    reviewer_id = Identifier(required=True)
    target_id = Identifier(required=True)
    target_type = String(required=True, max_length=20)
    rating = Integer(required=True)
    order_id = Identifier()
    title = String(max_length=200)
    comment = Text()
    images = Text()  # JSON array of image URLs


def _ensure_target_exists(target_id, target_type):
    if target_type == ReviewTarget.PRODUCT.value:
        try:
            current_domain.repository_for(Product).get(target_id)
        except ObjectNotFoundError:
            raise ValidationError({"target_id": [f"Product {target_id} does not exist"]})
    elif target_type == ReviewTarget.PROFESSIONAL.value:
        if count(query(Store, professional_id=target_id)) == 0:
            raise ValidationError({"target_id": [f"Professional {target_id} has no store"]})
    else:
        raise ValidationError({"target_type": [f"Unknown review target {target_type}"]})


def _is_verified_purchase(order_id, reviewer_id, target_id, target_type) -> bool:
    if not order_id:
        return False
    try:
        order = current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError:
        return False
    if str(order.customer_id) != reviewer_id or order.status != OrderStatus.DELIVERED.value:
        return False
    if target_type == ReviewTarget.PRODUCT.value:
        return any(str(item.product_id) == target_id for item in order.items)
    return order.involves_professional(target_id)


@marketplace.command_handler(part_of=Review)
class SubmitReviewHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        reviewer_id = str(command.reviewer_id)
        target_id = str(command.target_id)
        _ensure_target_exists(target_id, command.target_type)

        already = query(
            Review,
            reviewer_id=reviewer_id,
            target_id=target_id,
            target_type=command.target_type,
            status=ReviewStatus.PUBLISHED.value,
        )
        if count(already):
            raise ValidationError({"review": ["You have already reviewed this item"]})

        review = Review.submit(
            reviewer_id=reviewer_id,
            target_id=target_id,
            target_type=command.target_type,
            rating=command.rating,
            title=command.title,
            comment=command.comment,
            images=json.loads(command.images) if command.images else None,
            order_id=command.order_id,
            is_verified=_is_verified_purchase(command.order_id, reviewer_id, target_id, command.target_type),
        )
        current_domain.repository_for(Review).add(review)
        refresh_store_rating(review)
        return str(review.id)
