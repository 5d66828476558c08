"""Domain events for the Review aggregate.

Events record moderation history. The product rating is not driven by
them: lifecycle operations call the rating recompute explicitly.
"""

from protean.fields import DateTime, Identifier, Integer, String

from catalogue.domain import catalogue


@catalogue.event(part_of="Review")
class ReviewSubmitted:
    """A shopper submitted a review; it awaits moderation."""

    __version__ = 1

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    reviewer_email = String(required=True)
    rating = Integer(required=True)
    submitted_at = DateTime(required=True)


@catalogue.event(part_of="Review")
class ReviewApproved:
    """A moderator approved the review; it now counts toward the rating."""

    __version__ = 1

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    rating = Integer(required=True)
    previous_status = String(required=True)
    moderator_id = Identifier()
    approved_at = DateTime(required=True)


@catalogue.event(part_of="Review")
class ReviewRejected:
    """A moderator rejected the review."""

    __version__ = 1

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    previous_status = String(required=True)
    moderator_id = Identifier()
    rejected_at = DateTime(required=True)


@catalogue.event(part_of="Review")
class ReviewMarkedHelpful:
    """A reader marked the review as helpful."""

    __version__ = 1

    review_id = Identifier(required=True)
    helpful_count = Integer(required=True)
    marked_at = DateTime(required=True)
