"""Application tests for CategoryDirectory."""

import pytest
from catalogue.category.category import Category
from catalogue.category.directory import CategoryDirectory
from catalogue.category.product_count import recompute_category_product_count
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from shared.errors import ConflictError, ForbiddenError


@pytest.fixture()
def directory():
    return CategoryDirectory()


class TestCategoryWrites:
    def test_create(self, directory, moderator):
        category = directory.create(caller=moderator, name="Kitchen Robots", icon="🍳", display_order=2)
        assert category.slug == "kitchen-robots"
        assert category.product_count == 0

    def test_create_requires_moderator(self, directory, shopper):
        with pytest.raises(ForbiddenError):
            directory.create(caller=shopper, name="Kitchen Robots")

    def test_duplicate_name_conflicts(self, directory, moderator):
        directory.create(caller=moderator, name="Kitchen Robots")
        with pytest.raises(ConflictError):
            directory.create(caller=moderator, name="Kitchen  Robots")

    def test_update(self, directory, moderator):
        category = directory.create(caller=moderator, name="Kitchen Robots")
        updated = directory.update(category.id, caller=moderator, description="Cooking helpers", status="inactive")
        assert updated.description == "Cooking helpers"
        assert updated.status == "inactive"

    def test_delete_empty_category(self, directory, moderator):
        category = directory.create(caller=moderator, name="Kitchen Robots")
        directory.delete(category.id, caller=moderator)
        with pytest.raises(ObjectNotFoundError):
            current_domain.repository_for(Category).get(category.id)

    def test_delete_refused_while_products_reference_it(self, directory, category, make_product, moderator):
        make_product()
        recompute_category_product_count(category.id)

        with pytest.raises(ValidationError) as exc:
            directory.delete(category.id, caller=moderator)
        assert "category" in exc.value.messages
        assert current_domain.repository_for(Category).get(category.id) is not None


class TestCategoryReads:
    def test_get_by_slug(self, directory, moderator):
        category = directory.create(caller=moderator, name="Lawn Care")
        assert directory.get("lawn-care").id == category.id

    def test_list_in_display_order(self, directory, moderator):
        directory.create(caller=moderator, name="Zeta", display_order=1)
        directory.create(caller=moderator, name="Alpha", display_order=2)
        directory.create(caller=moderator, name="Beta", display_order=1)

        assert [c.name for c in directory.list()] == ["Beta", "Zeta", "Alpha"]

    def test_list_by_status(self, directory, moderator):
        directory.create(caller=moderator, name="Shown")
        directory.create(caller=moderator, name="Hidden", status="inactive")

        assert [c.name for c in directory.list(status="active")] == ["Shown"]
