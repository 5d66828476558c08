"""SubmitReview — submit a new product review.

The product must exist, and a reviewer may review a product only once
(matched on the normalized email). Both are cross-aggregate checks, so they
live in the handler rather than on the aggregate. Submitting does not touch
the product rating: pending reviews are invisible to it.

The duplicate check is a read followed by an insert with no unique
constraint behind it, so two concurrent submits from one reviewer can both
succeed.
"""

from protean.fields import Boolean, Identifier, Integer, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from catalogue.domain import catalogue
from catalogue.product.product import Product
from catalogue.review.review import Review
from shared.email import normalize_email
from shared.errors import ConflictError


@catalogue.command(part_of="Review")
class SubmitReview:
    product_id = Identifier(required=True)
    reviewer_name = String(required=True, max_length=100)
    reviewer_email = String(required=True, max_length=254)
    rating = Integer(required=True, min_value=1, max_value=5)
    comment = String(required=True, max_length=1000)
    verified = Boolean(default=False)


@catalogue.command_handler(part_of=Review)
class SubmitReviewHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        # Raises ObjectNotFoundError for an unknown product
        current_domain.repository_for(Product).get(command.product_id)

        repo = current_domain.repository_for(Review)
        email = normalize_email(command.reviewer_email)

        existing = repo._dao.query.filter(
            product_id=str(command.product_id),
            reviewer_email=email,
        ).all()
        if existing.items:
            raise ConflictError({"review": ["You have already reviewed this product"]})

        review = Review.submit(
            product_id=command.product_id,
            reviewer_name=command.reviewer_name,
            reviewer_email=email,
            rating=command.rating,
            comment=command.comment,
            verified=command.verified,
        )
        repo.add(review)

        return str(review.id)
