"""Product aggregate root."""

import json
from datetime import datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String, Text

from catalogue.domain import catalogue
from catalogue.shared.slug import slugify


class ProductStatus(Enum):
    """Enumeration of product lifecycle statuses."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    DISCONTINUED = "discontinued"


@catalogue.aggregate
class Product:
    """A sellable item in the storefront.

    ``rating`` and ``num_reviews`` are a cache of the approved-review
    aggregate. They are never assigned through this class: the only writer is
    ``catalogue.review.rating.recompute_product_rating``, which updates the
    two fields in place.
    """

    name: String(required=True, max_length=200)
    slug: String(required=True, max_length=220)
    description: String(required=True, max_length=2000)
    price: Float(required=True, min_value=0.0)
    discount_price: Float(min_value=0.0)
    category_id: Identifier(required=True)
    stock: Integer(default=0, min_value=0)
    in_stock: Boolean(default=False)
    status: String(choices=ProductStatus, default=ProductStatus.ACTIVE.value)
    featured: Boolean(default=False)
    tags: Text()  # JSON array of strings
    rating: Float(default=0.0, min_value=0.0, max_value=5.0)
    num_reviews: Integer(default=0, min_value=0)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @invariant.post
    def discount_must_be_below_price(self):
        if self.discount_price is not None and self.price is not None and self.discount_price >= self.price:
            raise ValidationError({"discount_price": ["Discount price must be less than regular price"]})

    @invariant.post
    def in_stock_follows_stock(self):
        if self.stock is not None and self.in_stock != (self.stock > 0):
            raise ValidationError({"in_stock": ["In-stock flag must reflect the stock quantity"]})

    @classmethod
    def create(
        cls,
        name,
        description,
        price,
        category_id,
        stock=0,
        discount_price=None,
        status=None,
        featured=False,
        tags=None,
    ):
        from catalogue.product.events import ProductCreated

        slug = slugify(name)
        if not slug:
            raise ValidationError({"name": ["Product name must contain letters or digits"]})

        now = datetime.now()
        stock = stock or 0

        product = cls(
            name=name,
            slug=slug,
            description=description,
            price=price,
            discount_price=discount_price,
            category_id=category_id,
            stock=stock,
            in_stock=stock > 0,
            status=status or ProductStatus.ACTIVE.value,
            featured=bool(featured),
            tags=json.dumps(tags) if tags else None,
            rating=0.0,
            num_reviews=0,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=product.id,
                name=name,
                slug=slug,
                category_id=category_id,
                price=price,
                status=product.status,
                created_at=now,
            )
        )
        return product

    def update_details(
        self,
        name=None,
        description=None,
        price=None,
        discount_price=None,
        category_id=None,
        stock=None,
        status=None,
        featured=None,
        tags=None,
    ):
        """Apply a partial update. Returns the previous category id."""
        from catalogue.product.events import ProductDetailsUpdated

        previous_category_id = self.category_id

        with atomic_change(self):
            if name is not None:
                slug = slugify(name)
                if not slug:
                    raise ValidationError({"name": ["Product name must contain letters or digits"]})
                self.name = name
                self.slug = slug
            if description is not None:
                self.description = description
            if price is not None:
                self.price = price
            if discount_price is not None:
                self.discount_price = discount_price
            if category_id is not None:
                self.category_id = category_id
            if stock is not None:
                self.stock = stock
                self.in_stock = stock > 0
            if status is not None:
                self.status = status
            if featured is not None:
                self.featured = featured
            if tags is not None:
                self.tags = json.dumps(tags)

            self.updated_at = datetime.now()

        self.raise_(
            ProductDetailsUpdated(
                product_id=self.id,
                name=self.name,
                slug=self.slug,
                category_id=self.category_id,
                price=self.price,
                status=self.status,
            )
        )
        return previous_category_id

    @property
    def tag_list(self):
        return json.loads(self.tags) if self.tags else []
