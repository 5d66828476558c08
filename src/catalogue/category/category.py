"""Category aggregate root for product categorization."""

from datetime import datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Integer, String

from catalogue.domain import catalogue
from catalogue.shared.slug import slugify


class CategoryStatus(Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


@catalogue.aggregate
class Category:
    """A flat grouping for browsing products in the storefront.

    ``product_count`` is a denormalized count of the products that reference
    the category. It is rewritten only by
    ``catalogue.category.product_count.recompute_category_product_count``.
    """

    name: String(required=True, max_length=100)
    slug: String(required=True, max_length=120)
    description: String(max_length=500)
    icon: String(max_length=50)
    display_order: Integer(default=0)
    status: String(choices=CategoryStatus, default=CategoryStatus.ACTIVE.value)
    product_count: Integer(default=0, min_value=0)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @classmethod
    def create(cls, name, description=None, icon=None, display_order=0, status=None):
        from catalogue.category.events import CategoryCreated

        slug = slugify(name)
        if not slug:
            raise ValidationError({"name": ["Category name must contain letters or digits"]})

        now = datetime.now()
        category = cls(
            name=name,
            slug=slug,
            description=description,
            icon=icon,
            display_order=display_order or 0,
            status=status or CategoryStatus.ACTIVE.value,
            product_count=0,
            created_at=now,
            updated_at=now,
        )
        category.raise_(
            CategoryCreated(
                category_id=category.id,
                name=name,
                slug=slug,
            )
        )
        return category

    def update_details(self, name=None, description=None, icon=None, display_order=None, status=None):
        from catalogue.category.events import CategoryDetailsUpdated

        if name is not None:
            slug = slugify(name)
            if not slug:
                raise ValidationError({"name": ["Category name must contain letters or digits"]})
            self.name = name
            self.slug = slug
        if description is not None:
            self.description = description
        if icon is not None:
            self.icon = icon
        if display_order is not None:
            self.display_order = display_order
        if status is not None:
            self.status = status

        self.updated_at = datetime.now()

        self.raise_(
            CategoryDetailsUpdated(
                category_id=self.id,
                name=self.name,
                slug=self.slug,
                status=self.status,
            )
        )

    def assert_removable(self):
        if self.product_count and self.product_count > 0:
            raise ValidationError(
                {
                    "category": [
                        "Cannot delete category with products. Please delete or reassign products first."
                    ]
                }
            )
