"""Review lifecycle — sequences review commands and rating recomputes.

Every mutating operation processes its command first. The handler runs in
its own unit of work, which has committed by the time ``process`` returns,
so the recompute that follows always reads the post-mutation review set.
The recompute is an explicit call, never a persistence hook.

Moderation and deletion are reserved for moderators. The predicate is
injected so callers (and tests) can substitute their own policy.
"""

import structlog
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from catalogue.review.helpful import MarkReviewHelpful
from catalogue.review.moderation import SetReviewStatus
from catalogue.review.rating import recompute_product_rating
from catalogue.review.removal import DeleteReview
from catalogue.review.review import Review, ReviewStatus
from catalogue.review.submission import SubmitReview
from shared.auth import ANONYMOUS, is_moderator
from shared.errors import ForbiddenError

logger = structlog.get_logger(__name__)

MAX_PAGE_SIZE = 100


def _validate_page(page, limit):
    errors = {}
    if page < 1:
        errors["page"] = ["Page must be at least 1"]
    if limit < 1 or limit > MAX_PAGE_SIZE:
        errors["limit"] = [f"Limit must be between 1 and {MAX_PAGE_SIZE}"]
    if errors:
        raise ValidationError(errors)


class ReviewLifecycle:
    """Create, moderate, delete and read reviews, keeping product ratings current."""

    def __init__(self, is_moderator=is_moderator):
        self._is_moderator = is_moderator

    # -------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------
    def submit(self, product_id, reviewer_name, reviewer_email, rating, comment, verified=False):
        """Submit a pending review. The product rating is left untouched."""
        review_id = current_domain.process(
            SubmitReview(
                product_id=product_id,
                reviewer_name=reviewer_name,
                reviewer_email=reviewer_email,
                rating=rating,
                comment=comment,
                verified=verified,
            ),
            asynchronous=False,
        )
        logger.info("Review submitted", review_id=review_id, product_id=str(product_id))
        return self._repo().get(review_id)

    def set_status(self, review_id, status, caller=ANONYMOUS):
        """Move a review to ``approved`` or ``rejected`` and recompute its product's rating.

        The recompute runs even when the status is unchanged.
        """
        self._assert_moderator(caller)

        product_id = current_domain.process(
            SetReviewStatus(review_id=review_id, status=status, moderator_id=caller.subject),
            asynchronous=False,
        )
        logger.info("Review status set", review_id=str(review_id), product_id=product_id, status=status)

        self._recompute(product_id)
        return self._repo().get(review_id)

    def approve(self, review_id, caller=ANONYMOUS):
        return self.set_status(review_id, ReviewStatus.APPROVED.value, caller=caller)

    def reject(self, review_id, caller=ANONYMOUS):
        return self.set_status(review_id, ReviewStatus.REJECTED.value, caller=caller)

    def delete(self, review_id, caller=ANONYMOUS):
        """Remove a review in any status and recompute its former product's rating."""
        self._assert_moderator(caller)

        product_id = current_domain.process(DeleteReview(review_id=review_id), asynchronous=False)
        logger.info("Review deleted", review_id=str(review_id), product_id=product_id)

        self._recompute(product_id)

    def mark_helpful(self, review_id, caller=ANONYMOUS):
        """Count a helpful vote. Only reviews the caller may read can be voted on."""
        self.get(review_id, caller=caller)
        current_domain.process(MarkReviewHelpful(review_id=review_id), asynchronous=False)
        return self._repo().get(review_id)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def get(self, review_id, caller=ANONYMOUS):
        """Fetch a review. Callers other than moderators only ever see approved ones."""
        review = self._repo().get(review_id)
        if not review.is_approved and not self._is_moderator(caller):
            raise ObjectNotFoundError({"_entity": f"Review with id `{review_id}` does not exist"})
        return review

    def list_approved(self, product_id, page=1, limit=10):
        """Approved reviews for a product, newest first. Returns ``(reviews, total)``."""
        return self._page(
            {"product_id": str(product_id), "status": ReviewStatus.APPROVED.value},
            page,
            limit,
        )

    def list_reviews(self, caller=ANONYMOUS, product_id=None, status=None, page=1, limit=10):
        """Reviews across products. Non-approved statuses are visible to moderators only."""
        moderator = self._is_moderator(caller)
        if status is None and not moderator:
            status = ReviewStatus.APPROVED.value
        if status is not None:
            try:
                ReviewStatus(status)
            except ValueError:
                raise ValidationError({"status": [f"Unknown review status '{status}'"]}) from None
            if status != ReviewStatus.APPROVED.value and not moderator:
                raise ForbiddenError({"status": ["Only moderators can list unapproved reviews"]})

        filters = {}
        if product_id:
            filters["product_id"] = str(product_id)
        if status:
            filters["status"] = status
        return self._page(filters, page, limit)

    # -------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------
    def _repo(self):
        return current_domain.repository_for(Review)

    def _page(self, filters, page, limit):
        _validate_page(page, limit)
        query = self._repo()._dao.query
        if filters:
            query = query.filter(**filters)
        result = query.order_by("-created_at").offset((page - 1) * limit).limit(limit).all()
        return result.items, result.total

    def _assert_moderator(self, caller):
        if not self._is_moderator(caller):
            raise ForbiddenError({"_entity": ["Moderator access required"]})

    def _recompute(self, product_id):
        try:
            recompute_product_rating(product_id)
        except Exception:
            logger.warning("Product rating recompute failed", product_id=product_id, exc_info=True)
