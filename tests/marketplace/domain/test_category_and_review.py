"""Tests for the Category and Review aggregates and the store rating they feed."""

import pytest
from marketplace.category.category import Category
from marketplace.category.events import CategoryCreated, CategoryUpdated
from marketplace.review.events import ReviewRemoved, ReviewSubmitted
from marketplace.review.review import Review, ReviewStatus, ReviewTarget
from marketplace.store.store import Store
from protean.exceptions import ValidationError


def _review(rating=4, **overrides):
    details = {
        "reviewer_id": "cust-001",
        "target_id": "pro-001",
        "target_type": ReviewTarget.PROFESSIONAL.value,
        "rating": rating,
        "title": "Lovely stitching",
        "comment": "The hem was finished beautifully.",
    }
    details.update(overrides)
    return Review.submit(**details)


class TestCategory:
    def test_create_derives_slug(self):
        category = Category.create("Evening Wear")
        assert category.slug == "evening-wear"
        assert category.is_top_level
        assert category.is_active is True
        assert isinstance(category._events[0], CategoryCreated)

    def test_subcategory_keeps_parent(self):
        parent = Category.create("Women")
        child = Category.create("Dresses", parent_id=parent.id)
        assert str(child.parent_id) == str(parent.id)
        assert not child.is_top_level

    def test_cannot_be_its_own_parent(self):
        category = Category.create("Accessories")
        with pytest.raises(ValidationError):
            category.update_details(parent_id=category.id)

    def test_update_rejects_unknown_fields(self):
        category = Category.create("Accessories")
        with pytest.raises(ValidationError):
            category.update_details(slug="other")

    def test_update_and_move_to_top_level(self):
        category = Category.create("Scarves", parent_id="cat-accessories")
        category._events.clear()
        category.move_to_top_level()
        category.update_details(display_order=3, is_active=False)

        assert category.is_top_level
        assert category.display_order == 3
        assert category.is_active is False
        assert isinstance(category._events[-1], CategoryUpdated)


class TestReview:
    def test_submit_publishes(self):
        review = _review(rating=5, images=["https://img.example/1.jpg"])
        assert review.status == ReviewStatus.PUBLISHED.value
        assert review.image_urls == ["https://img.example/1.jpg"]
        assert review.is_verified is False
        event = review._events[0]
        assert isinstance(event, ReviewSubmitted)
        assert event.rating == 5

    @pytest.mark.parametrize("rating", [0, 6, -1])
    def test_rating_must_be_between_one_and_five(self, rating):
        with pytest.raises(ValidationError) as exc:
            _review(rating=rating)
        assert "rating" in exc.value.messages

    def test_image_limit(self):
        with pytest.raises(ValidationError):
            _review(images=[f"https://img.example/{i}.jpg" for i in range(6)])

    def test_remove(self):
        review = _review()
        review.remove(removed_by="admin-1", reason="Abusive language")
        assert review.status == ReviewStatus.REMOVED.value
        assert review.is_published is False
        assert isinstance(review._events[-1], ReviewRemoved)

    def test_removed_review_cannot_be_removed_again(self):
        review = _review()
        review.remove(removed_by="admin-1")
        with pytest.raises(ValidationError):
            review.remove(removed_by="admin-2")


class TestStoreRating:
    def test_record_rating_rounds_average(self):
        store = Store.open("pro-001", "Zawadi Designs")
        store.record_rating(13 / 3, 3)
        assert store.rating == 4.33
        assert store.total_reviews == 3
