"""Store ratings recomputed from a professional's published reviews."""

import structlog
from protean.utils.globals import current_domain
from shared.listing import everything, query

from marketplace.review.review import Review, ReviewStatus, ReviewTarget
from marketplace.store.store import Store

logger = structlog.get_logger(__name__)


def refresh_store_rating(changed: Review) -> Store | None:
    """Recompute the reviewed professional's store rating.

    ``changed`` is the review being added or removed in the current unit of
    work; it replaces whatever copy the repository still holds.
    """
    if changed.target_type != ReviewTarget.PROFESSIONAL.value:
        return None

    professional_id = str(changed.target_id)
    store = query(Store, professional_id=professional_id).all().first
    if store is None:
        return None

    published = everything(
        query(
            Review,
            target_type=ReviewTarget.PROFESSIONAL.value,
            target_id=professional_id,
            status=ReviewStatus.PUBLISHED.value,
        )
    )
    ratings = {str(review.id): review.rating for review in published}
    if changed.is_published:
        ratings[str(changed.id)] = changed.rating
    else:
        ratings.pop(str(changed.id), None)

    average = sum(ratings.values()) / len(ratings) if ratings else 0.0
    store.record_rating(average, len(ratings))
    current_domain.repository_for(Store).add(store)
    logger.info("Store rating refreshed", professional_id=professional_id, rating=store.rating, reviews=len(ratings))
    return store
