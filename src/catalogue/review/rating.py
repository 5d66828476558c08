"""Product rating aggregate — ``rating`` and ``num_reviews`` on a product.

``recompute_product_rating`` is the only writer of the two fields. It is a
full recomputation from the approved reviews currently in the store, so
calling it again with no intervening review change writes the same values,
and a trigger that reads a transient state is corrected by the next one.

Every trigger point calls it: moderation, review deletion, seeding and the
``recompute-ratings`` backfill command.
"""

from decimal import ROUND_HALF_UP, Decimal

import structlog
from protean.utils.globals import current_domain
from protean.utils.query import Q

from catalogue.product.product import Product
from catalogue.review.review import Review, ReviewStatus

logger = structlog.get_logger(__name__)

BATCH_SIZE = 100

_ONE_DECIMAL = Decimal("0.1")


def average_rating(ratings):
    """Mean of ``ratings`` rounded half-up to one decimal; ``0.0`` when empty."""
    if not ratings:
        return 0.0
    mean = Decimal(sum(ratings)) / Decimal(len(ratings))
    return float(mean.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def approved_ratings(product_id):
    """Star ratings of every approved review for ``product_id``, read in batches."""
    dao = current_domain.repository_for(Review)._dao
    ratings = []
    offset = 0

    while True:
        page = (
            dao.query.filter(product_id=str(product_id), status=ReviewStatus.APPROVED.value)
            .order_by("id")
            .offset(offset)
            .limit(BATCH_SIZE)
            .all()
        )
        ratings.extend(review.rating for review in page.items)
        offset += BATCH_SIZE
        if not page.items or offset >= page.total:
            break

    return ratings


def recompute_product_rating(product_id):
    """Rewrite ``rating`` and ``num_reviews`` for ``product_id``.

    Only the two aggregate fields are written, in a single update filtered by
    product id, so a concurrent edit to other product fields is never
    clobbered. Returns ``(rating, num_reviews)``, or ``None`` when the product
    no longer exists, in which case nothing is written.
    """
    if not product_id:
        return None

    ratings = approved_ratings(product_id)
    rating = average_rating(ratings)
    num_reviews = len(ratings)

    # Bulk write of the two fields only; returns the number of matched rows
    updated = current_domain.repository_for(Product)._dao._update_all(
        Q(id=str(product_id)), rating=rating, num_reviews=num_reviews
    )
    if not updated:
        logger.info("Product missing, rating not recomputed", product_id=str(product_id))
        return None

    logger.debug(
        "Product rating recomputed",
        product_id=str(product_id),
        rating=rating,
        num_reviews=num_reviews,
    )
    return rating, num_reviews
