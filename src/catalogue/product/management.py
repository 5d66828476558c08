"""Product management — create, update and delete commands and handlers.

Handlers return what the caller needs to refresh category product counts
once the unit of work has committed: the new product id on create, and the
affected category ids on update and delete.
"""

import json

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from catalogue.category.category import Category
from catalogue.domain import catalogue
from catalogue.product.product import Product
from catalogue.shared.slug import slugify
from shared.errors import ConflictError


@catalogue.command(part_of="Product")
class CreateProduct:
    name: String(required=True, max_length=200)
    description: String(required=True, max_length=2000)
    price: Float(required=True, min_value=0.0)
    discount_price: Float(min_value=0.0)
    category_id: Identifier(required=True)
    stock: Integer(default=0, min_value=0)
    status: String(max_length=20)
    featured: Boolean(default=False)
    tags: Text()  # JSON array of strings


@catalogue.command(part_of="Product")
class UpdateProduct:
    product_id: Identifier(required=True)
    name: String(max_length=200)
    description: String(max_length=2000)
    price: Float(min_value=0.0)
    discount_price: Float(min_value=0.0)
    category_id: Identifier()
    stock: Integer(min_value=0)
    status: String(max_length=20)
    featured: Boolean()
    tags: Text()


@catalogue.command(part_of="Product")
class DeleteProduct:
    product_id: Identifier(required=True)


def _assert_category_exists(category_id):
    try:
        current_domain.repository_for(Category).get(category_id)
    except ObjectNotFoundError:
        raise ValidationError({"category_id": [f"Category {category_id} does not exist"]}) from None


def _assert_slug_available(name, product_id=None):
    clashes = current_domain.repository_for(Product)._dao.query.filter(slug=slugify(name)).all().items
    if any(str(p.id) != str(product_id) for p in clashes):
        raise ConflictError({"name": [f"A product named '{name}' already exists"]})


def _parse_tags(raw):
    if raw is None:
        return None
    tags = json.loads(raw)
    if not isinstance(tags, list):
        raise ValidationError({"tags": ["Tags must be a JSON array of strings"]})
    return tags


@catalogue.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        _assert_category_exists(command.category_id)
        _assert_slug_available(command.name)

        product = Product.create(
            name=command.name,
            description=command.description,
            price=command.price,
            discount_price=command.discount_price,
            category_id=command.category_id,
            stock=command.stock,
            status=command.status,
            featured=command.featured,
            tags=_parse_tags(command.tags),
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        if command.category_id is not None:
            _assert_category_exists(command.category_id)
        if command.name is not None:
            _assert_slug_available(command.name, product_id=product.id)

        previous_category_id = product.update_details(
            name=command.name,
            description=command.description,
            price=command.price,
            discount_price=command.discount_price,
            category_id=command.category_id,
            stock=command.stock,
            status=command.status,
            featured=command.featured,
            tags=_parse_tags(command.tags),
        )
        repo.add(product)

        return sorted({str(previous_category_id), str(product.category_id)})

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        category_id = str(product.category_id)

        repo._dao.delete(product)
        return category_id
