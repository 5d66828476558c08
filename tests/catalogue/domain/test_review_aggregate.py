"""Tests for Review aggregate creation, validation and helpful votes."""

import pytest
from catalogue.review.events import ReviewMarkedHelpful, ReviewSubmitted
from catalogue.review.review import Review, ReviewStatus
from protean.exceptions import ValidationError


def _make_review(**overrides):
    defaults = {
        "product_id": "prod-001",
        "reviewer_name": "Sarah Johnson",
        "reviewer_email": "sarah.j@email.com",
        "rating": 5,
        "comment": "Handles pet hair like a champ.",
    }
    defaults.update(overrides)
    return Review.submit(**defaults)


class TestReviewSubmission:
    def test_submit_starts_pending(self):
        review = _make_review()
        assert review.status == ReviewStatus.PENDING.value

    def test_submit_sets_defaults(self):
        review = _make_review()
        assert review.helpful_count == 0
        assert review.verified is False
        assert review.created_at is not None
        assert review.updated_at is not None

    def test_submit_normalizes_email(self):
        review = _make_review(reviewer_email="  Sarah.J@Email.COM ")
        assert review.reviewer_email == "sarah.j@email.com"

    def test_submit_raises_event(self):
        review = _make_review()
        assert len(review._events) == 1
        event = review._events[0]
        assert isinstance(event, ReviewSubmitted)
        assert event.product_id == "prod-001"
        assert event.rating == 5

    def test_verified_flag_is_kept(self):
        review = _make_review(verified=True)
        assert review.verified is True


class TestReviewValidation:
    @pytest.mark.parametrize("rating", [0, 6, -1])
    def test_rating_out_of_range(self, rating):
        with pytest.raises(ValidationError) as exc:
            _make_review(rating=rating)
        assert "rating" in exc.value.messages

    @pytest.mark.parametrize("rating", [1, 5])
    def test_rating_bounds_accepted(self, rating):
        assert _make_review(rating=rating).rating == rating

    def test_comment_too_long(self):
        with pytest.raises(ValidationError) as exc:
            _make_review(comment="x" * 1001)
        assert "comment" in exc.value.messages

    def test_comment_at_limit(self):
        assert len(_make_review(comment="x" * 1000).comment) == 1000

    def test_comment_required(self):
        with pytest.raises(ValidationError):
            _make_review(comment=None)

    def test_reviewer_name_required(self):
        with pytest.raises(ValidationError):
            _make_review(reviewer_name=None)

    def test_invalid_email(self):
        with pytest.raises(ValidationError) as exc:
            _make_review(reviewer_email="not-an-email")
        assert "reviewer_email" in exc.value.messages

    def test_product_required(self):
        with pytest.raises(ValidationError):
            _make_review(product_id=None)


class TestHelpfulVotes:
    def test_mark_helpful_increments(self):
        review = _make_review()
        review.mark_helpful()
        review.mark_helpful()
        assert review.helpful_count == 2

    def test_mark_helpful_raises_event(self):
        review = _make_review()
        review._events.clear()
        review.mark_helpful()
        assert isinstance(review._events[-1], ReviewMarkedHelpful)
        assert review._events[-1].helpful_count == 1

    def test_mark_helpful_does_not_change_status(self):
        review = _make_review()
        review.mark_helpful()
        assert review.status == ReviewStatus.PENDING.value
