"""Category directory — moderator-only category writes and public reads."""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from catalogue.category.category import Category
from catalogue.category.management import CreateCategory, DeleteCategory, UpdateCategory
from shared.auth import ANONYMOUS, is_moderator
from shared.errors import ForbiddenError

logger = structlog.get_logger(__name__)

BATCH_SIZE = 100


class CategoryDirectory:
    def __init__(self, is_moderator=is_moderator):
        self._is_moderator = is_moderator

    def create(self, caller=ANONYMOUS, **fields):
        self._assert_moderator(caller)
        category_id = current_domain.process(CreateCategory(**fields), asynchronous=False)
        logger.info("Category created", category_id=category_id)
        return self._repo().get(category_id)

    def update(self, category_id, caller=ANONYMOUS, **fields):
        self._assert_moderator(caller)
        current_domain.process(UpdateCategory(category_id=category_id, **fields), asynchronous=False)
        logger.info("Category updated", category_id=str(category_id))
        return self._repo().get(category_id)

    def delete(self, category_id, caller=ANONYMOUS):
        """Delete a category. Refused while any product still references it."""
        self._assert_moderator(caller)
        current_domain.process(DeleteCategory(category_id=category_id), asynchronous=False)
        logger.info("Category deleted", category_id=str(category_id))

    def get(self, id_or_slug):
        repo = self._repo()
        try:
            return repo.get(id_or_slug)
        except ObjectNotFoundError:
            matches = repo._dao.query.filter(slug=id_or_slug).all().items
            if not matches:
                raise
            return matches[0]

    def list(self, status=None):
        """All categories in display order, then by name."""
        query = self._repo()._dao.query
        if status:
            query = query.filter(status=status)

        categories = []
        offset = 0
        while True:
            page = query.order_by("display_order").offset(offset).limit(BATCH_SIZE).all()
            categories.extend(page.items)
            offset += BATCH_SIZE
            if not page.items or offset >= page.total:
                break

        return sorted(categories, key=lambda c: (c.display_order or 0, c.name))

    def _repo(self):
        return current_domain.repository_for(Category)

    def _assert_moderator(self, caller):
        if not self._is_moderator(caller):
            raise ForbiddenError({"_entity": ["Moderator access required"]})
