"""SetReviewStatus — approve or reject a review.

The handler returns the review's product id so the caller can recompute the
product rating once the status change has been committed.
"""

from protean.fields import Identifier, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from catalogue.domain import catalogue
from catalogue.review.review import Review


@catalogue.command(part_of="Review")
class SetReviewStatus:
    review_id = Identifier(required=True)
    status = String(required=True, max_length=20)  # "approved" or "rejected"
    moderator_id = Identifier()


@catalogue.command_handler(part_of=Review)
class SetReviewStatusHandler:
    @handle(SetReviewStatus)
    def set_review_status(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)

        review.moderate(command.status, moderator_id=command.moderator_id)
        repo.add(review)

        return str(review.product_id)
