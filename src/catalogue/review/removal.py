"""DeleteReview — physically remove a review in any status."""

from protean.fields import Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from catalogue.domain import catalogue
from catalogue.review.review import Review


@catalogue.command(part_of="Review")
class DeleteReview:
    review_id = Identifier(required=True)


@catalogue.command_handler(part_of=Review)
class DeleteReviewHandler:
    @handle(DeleteReview)
    def delete_review(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)

        # Captured before removal; the caller recomputes this product's rating
        product_id = str(review.product_id)
        repo._dao.delete(review)

        return product_id
