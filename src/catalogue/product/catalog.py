"""Product catalog — product commands plus category recounts, and product reads.

Like the review lifecycle, each write processes its command first and then
refreshes the denormalized counts it affects, so the recount always sees the
committed product set.
"""

import json

import structlog
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from catalogue.category.product_count import recompute_category_product_count
from catalogue.product.management import CreateProduct, DeleteProduct, UpdateProduct
from catalogue.product.product import Product
from catalogue.review.rating import recompute_product_rating
from shared.auth import ANONYMOUS, is_moderator
from shared.errors import ForbiddenError

logger = structlog.get_logger(__name__)

MAX_PAGE_SIZE = 100


class ProductCatalog:
    def __init__(self, is_moderator=is_moderator):
        self._is_moderator = is_moderator

    # -------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------
    def create(self, caller=ANONYMOUS, tags=None, **fields):
        self._assert_moderator(caller)

        product_id = current_domain.process(
            CreateProduct(tags=json.dumps(tags) if tags is not None else None, **fields),
            asynchronous=False,
        )
        product = self._repo().get(product_id)
        logger.info("Product created", product_id=product_id, category_id=str(product.category_id))

        self._recount(product.category_id)
        return self._repo().get(product_id)

    def update(self, product_id, caller=ANONYMOUS, tags=None, **fields):
        """Apply a partial update. Moving a product recounts both categories.

        Saving the product writes the whole record, including a rating read
        before the save, so the rating is re-derived afterwards as well.
        """
        self._assert_moderator(caller)

        category_ids = current_domain.process(
            UpdateProduct(
                product_id=product_id,
                tags=json.dumps(tags) if tags is not None else None,
                **fields,
            ),
            asynchronous=False,
        )
        logger.info("Product updated", product_id=str(product_id))

        for category_id in category_ids:
            self._recount(category_id)
        self._refresh_rating(product_id)
        return self._repo().get(product_id)

    def delete(self, product_id, caller=ANONYMOUS):
        """Delete a product. Its reviews stay in place; rating recomputes for it become no-ops."""
        self._assert_moderator(caller)

        category_id = current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
        logger.info("Product deleted", product_id=str(product_id), category_id=category_id)

        self._recount(category_id)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def get(self, id_or_slug):
        """Look a product up by id, falling back to its slug."""
        repo = self._repo()
        try:
            return repo.get(id_or_slug)
        except ObjectNotFoundError:
            matches = repo._dao.query.filter(slug=id_or_slug).all().items
            if not matches:
                raise
            return matches[0]

    def list(
        self,
        category_id=None,
        status=None,
        featured=None,
        in_stock=None,
        min_rating=None,
        min_price=None,
        max_price=None,
        page=1,
        limit=12,
    ):
        """Filtered products, newest first. Returns ``(products, total)``."""
        errors = {}
        if page < 1:
            errors["page"] = ["Page must be at least 1"]
        if limit < 1 or limit > MAX_PAGE_SIZE:
            errors["limit"] = [f"Limit must be between 1 and {MAX_PAGE_SIZE}"]
        if errors:
            raise ValidationError(errors)

        filters = {}
        if category_id:
            filters["category_id"] = str(category_id)
        if status:
            filters["status"] = status
        if featured is not None:
            filters["featured"] = featured
        if in_stock is not None:
            filters["in_stock"] = in_stock
        if min_rating is not None:
            filters["rating__gte"] = min_rating
        if min_price is not None:
            filters["price__gte"] = min_price
        if max_price is not None:
            filters["price__lte"] = max_price

        query = self._repo()._dao.query
        if filters:
            query = query.filter(**filters)
        result = query.order_by("-created_at").offset((page - 1) * limit).limit(limit).all()
        return result.items, result.total

    # -------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------
    def _repo(self):
        return current_domain.repository_for(Product)

    def _assert_moderator(self, caller):
        if not self._is_moderator(caller):
            raise ForbiddenError({"_entity": ["Moderator access required"]})

    def _recount(self, category_id):
        try:
            recompute_category_product_count(category_id)
        except Exception:
            logger.warning("Category product count recompute failed", category_id=str(category_id), exc_info=True)

    def _refresh_rating(self, product_id):
        try:
            recompute_product_rating(product_id)
        except Exception:
            logger.warning("Product rating recompute failed", product_id=str(product_id), exc_info=True)
