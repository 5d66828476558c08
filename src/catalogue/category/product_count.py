"""Category product count — the denormalized ``product_count`` on a category.

Same shape as the product rating aggregate, minus the averaging: count the
products that reference the category and overwrite the one field.
"""

import structlog
from protean.utils.globals import current_domain
from protean.utils.query import Q

from catalogue.category.category import Category
from catalogue.product.product import Product

logger = structlog.get_logger(__name__)


def recompute_category_product_count(category_id):
    """Rewrite ``product_count`` for ``category_id`` from the product store.

    Returns the new count, or ``None`` when the category does not exist.
    """
    if not category_id:
        return None

    count = current_domain.repository_for(Product)._dao.query.filter(category_id=str(category_id)).all().total

    updated = current_domain.repository_for(Category)._dao._update_all(Q(id=str(category_id)), product_count=count)
    if not updated:
        logger.info("Category missing, product count not recomputed", category_id=str(category_id))
        return None

    logger.debug("Category product count recomputed", category_id=str(category_id), product_count=count)
    return count
