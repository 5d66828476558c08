"""Review aggregate — a shopper's rating and comment on one product.

CQRS (not event sourced) — reviews are write-once with a small moderation
state machine and a helpful counter. Only approved reviews count toward a
product's rating; see ``catalogue.review.rating``.

State Machine (3 states):
    PENDING  → APPROVED | REJECTED
    APPROVED → APPROVED | REJECTED
    REJECTED → APPROVED | REJECTED

Nothing returns to PENDING. Re-applying the current status is allowed so a
moderator can re-trigger the rating recompute.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, Integer, String

from catalogue.domain import catalogue
from catalogue.review.events import (
    ReviewApproved,
    ReviewMarkedHelpful,
    ReviewRejected,
    ReviewSubmitted,
)
from shared.email import is_valid_email, normalize_email


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class ReviewStatus(Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


# ---------------------------------------------------------------------------
# State Machine
# ---------------------------------------------------------------------------
_MODERATED = {ReviewStatus.APPROVED, ReviewStatus.REJECTED}

_VALID_TRANSITIONS = {
    ReviewStatus.PENDING: _MODERATED,
    ReviewStatus.APPROVED: _MODERATED,
    ReviewStatus.REJECTED: _MODERATED,
}


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@catalogue.aggregate
class Review:
    """A product review awaiting or past moderation."""

    product_id = Identifier(required=True)

    # Reviewer
    reviewer_name = String(required=True, max_length=100)
    reviewer_email = String(required=True, max_length=254)

    # Content
    rating = Integer(required=True, min_value=1, max_value=5)
    comment = String(required=True, max_length=1000)

    # Moderation
    status = String(choices=ReviewStatus, default=ReviewStatus.PENDING.value)
    verified = Boolean(default=False)

    # Engagement
    helpful_count = Integer(default=0, min_value=0)

    # Timestamps
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Invariants
    # -------------------------------------------------------------------
    @invariant.post
    def reviewer_email_must_be_valid(self):
        if self.reviewer_email is not None and not is_valid_email(self.reviewer_email):
            raise ValidationError({"reviewer_email": ["Please provide a valid email"]})

    @invariant.post
    def comment_must_not_be_blank(self):
        if self.comment is not None and len(self.comment.strip()) == 0:
            raise ValidationError({"comment": ["Comment is required"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def submit(cls, product_id, reviewer_name, reviewer_email, rating, comment, verified=False):
        """Submit a new review. It stays invisible until a moderator approves it."""
        now = datetime.now(UTC)

        review = cls(
            product_id=product_id,
            reviewer_name=reviewer_name.strip() if reviewer_name else reviewer_name,
            reviewer_email=normalize_email(reviewer_email),
            rating=rating,
            comment=comment,
            status=ReviewStatus.PENDING.value,
            verified=verified,
            helpful_count=0,
            created_at=now,
            updated_at=now,
        )

        review.raise_(
            ReviewSubmitted(
                review_id=str(review.id),
                product_id=str(product_id),
                reviewer_email=review.reviewer_email,
                rating=rating,
                submitted_at=now,
            )
        )

        return review

    # -------------------------------------------------------------------
    # State transitions
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        """Validate state machine transition."""
        current = ReviewStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    def approve(self, moderator_id=None):
        """Approve the review so it counts toward the product rating."""
        self._assert_can_transition(ReviewStatus.APPROVED)

        now = datetime.now(UTC)
        previous = self.status
        self.status = ReviewStatus.APPROVED.value
        self.updated_at = now

        self.raise_(
            ReviewApproved(
                review_id=str(self.id),
                product_id=str(self.product_id),
                rating=self.rating,
                previous_status=previous,
                moderator_id=str(moderator_id) if moderator_id else None,
                approved_at=now,
            )
        )

    def reject(self, moderator_id=None):
        """Reject the review, removing it from the product rating if it was approved."""
        self._assert_can_transition(ReviewStatus.REJECTED)

        now = datetime.now(UTC)
        previous = self.status
        self.status = ReviewStatus.REJECTED.value
        self.updated_at = now

        self.raise_(
            ReviewRejected(
                review_id=str(self.id),
                product_id=str(self.product_id),
                previous_status=previous,
                moderator_id=str(moderator_id) if moderator_id else None,
                rejected_at=now,
            )
        )

    def moderate(self, status, moderator_id=None):
        """Move to ``status`` ("approved" or "rejected")."""
        try:
            target = ReviewStatus(status)
        except ValueError:
            raise ValidationError({"status": [f"Unknown review status '{status}'"]}) from None

        if target == ReviewStatus.APPROVED:
            self.approve(moderator_id=moderator_id)
        elif target == ReviewStatus.REJECTED:
            self.reject(moderator_id=moderator_id)
        else:
            self._assert_can_transition(target)

    # -------------------------------------------------------------------
    # Helpful votes
    # -------------------------------------------------------------------
    def mark_helpful(self):
        now = datetime.now(UTC)

        with atomic_change(self):
            self.helpful_count = (self.helpful_count or 0) + 1
            self.updated_at = now

        self.raise_(
            ReviewMarkedHelpful(
                review_id=str(self.id),
                helpful_count=self.helpful_count,
                marked_at=now,
            )
        )

    @property
    def is_approved(self):
        return self.status == ReviewStatus.APPROVED.value
