"""Tests for Review moderation transitions."""

import pytest
from catalogue.review.events import ReviewApproved, ReviewRejected
from catalogue.review.review import Review, ReviewStatus
from protean.exceptions import ValidationError


def _review_at_state(target_status):
    review = Review.submit(
        product_id="prod-001",
        reviewer_name="Mike Chen",
        reviewer_email="mike.c@email.com",
        rating=4,
        comment="Powerful suction.",
    )
    if target_status == ReviewStatus.APPROVED:
        review.approve()
    elif target_status == ReviewStatus.REJECTED:
        review.reject()
    review._events.clear()
    return review


class TestValidTransitions:
    def test_pending_to_approved(self):
        review = _review_at_state(ReviewStatus.PENDING)
        review.approve(moderator_id="mod-001")
        assert review.status == ReviewStatus.APPROVED.value
        assert review.is_approved

    def test_pending_to_rejected(self):
        review = _review_at_state(ReviewStatus.PENDING)
        review.reject(moderator_id="mod-001")
        assert review.status == ReviewStatus.REJECTED.value
        assert not review.is_approved

    def test_approved_to_rejected(self):
        review = _review_at_state(ReviewStatus.APPROVED)
        review.reject()
        assert review.status == ReviewStatus.REJECTED.value

    def test_rejected_to_approved(self):
        review = _review_at_state(ReviewStatus.REJECTED)
        review.approve()
        assert review.status == ReviewStatus.APPROVED.value

    def test_reapproving_is_allowed(self):
        review = _review_at_state(ReviewStatus.APPROVED)
        review.approve()
        assert review.status == ReviewStatus.APPROVED.value


class TestModerationEvents:
    def test_approve_raises_event_with_previous_status(self):
        review = _review_at_state(ReviewStatus.PENDING)
        review.approve(moderator_id="mod-001")
        event = review._events[-1]
        assert isinstance(event, ReviewApproved)
        assert event.previous_status == "pending"
        assert event.rating == 4
        assert event.moderator_id == "mod-001"

    def test_reject_raises_event(self):
        review = _review_at_state(ReviewStatus.APPROVED)
        review.reject()
        event = review._events[-1]
        assert isinstance(event, ReviewRejected)
        assert event.previous_status == "approved"
        assert event.moderator_id is None


class TestModerate:
    @pytest.mark.parametrize("status", ["approved", "rejected"])
    def test_moderate_to_status(self, status):
        review = _review_at_state(ReviewStatus.PENDING)
        review.moderate(status)
        assert review.status == status

    def test_cannot_return_to_pending(self):
        review = _review_at_state(ReviewStatus.APPROVED)
        with pytest.raises(ValidationError) as exc:
            review.moderate("pending")
        assert "status" in exc.value.messages
        assert review.status == ReviewStatus.APPROVED.value

    def test_unknown_status(self):
        review = _review_at_state(ReviewStatus.PENDING)
        with pytest.raises(ValidationError) as exc:
            review.moderate("published")
        assert "Unknown review status" in exc.value.messages["status"][0]
