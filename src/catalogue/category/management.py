"""Category management — commands and handlers."""

from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from catalogue.category.category import Category
from catalogue.domain import catalogue
from catalogue.shared.slug import slugify
from shared.errors import ConflictError


@catalogue.command(part_of="Category")
class CreateCategory:
    name: String(required=True, max_length=100)
    description: String(max_length=500)
    icon: String(max_length=50)
    display_order: Integer(default=0)
    status: String(max_length=20)


@catalogue.command(part_of="Category")
class UpdateCategory:
    category_id: Identifier(required=True)
    name: String(max_length=100)
    description: String(max_length=500)
    icon: String(max_length=50)
    display_order: Integer()
    status: String(max_length=20)


@catalogue.command(part_of="Category")
class DeleteCategory:
    category_id: Identifier(required=True)


def _assert_slug_available(name, category_id=None):
    repo = current_domain.repository_for(Category)
    clashes = repo._dao.query.filter(slug=slugify(name)).all().items
    if any(str(c.id) != str(category_id) for c in clashes):
        raise ConflictError({"name": [f"A category named '{name}' already exists"]})


@catalogue.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        _assert_slug_available(command.name)

        category = Category.create(
            name=command.name,
            description=command.description,
            icon=command.icon,
            display_order=command.display_order,
            status=command.status,
        )
        current_domain.repository_for(Category).add(category)
        return str(category.id)

    @handle(UpdateCategory)
    def update_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)

        if command.name is not None:
            _assert_slug_available(command.name, category_id=category.id)

        category.update_details(
            name=command.name,
            description=command.description,
            icon=command.icon,
            display_order=command.display_order,
            status=command.status,
        )
        repo.add(category)

    @handle(DeleteCategory)
    def delete_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)
        category.assert_removable()
        repo._dao.delete(category)
