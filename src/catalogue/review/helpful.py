"""MarkReviewHelpful — increment a review's helpful counter.

Concurrent increments are serialized by the aggregate's version check on
save. The counter plays no part in the product rating.
"""

from protean.fields import Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from catalogue.domain import catalogue
from catalogue.review.review import Review


@catalogue.command(part_of="Review")
class MarkReviewHelpful:
    review_id = Identifier(required=True)


@catalogue.command_handler(part_of=Review)
class MarkReviewHelpfulHandler:
    @handle(MarkReviewHelpful)
    def mark_review_helpful(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)

        review.mark_helpful()
        repo.add(review)

        return review.helpful_count
