"""Pydantic request/response schemas for the Catalogue API.

These are separate from Protean commands (anti-corruption pattern).
The API layer is the external contract; commands are internal domain concepts.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared
# ---------------------------------------------------------------------------
class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int

    @classmethod
    def of(cls, page: int, limit: int, total: int) -> Pagination:
        return cls(page=page, limit=limit, total=total, pages=math.ceil(total / limit))


class StatusResponse(BaseModel):
    status: str = "ok"


# ---------------------------------------------------------------------------
# Category
# ---------------------------------------------------------------------------
class CreateCategoryRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Educational Robots",
                    "description": "Robots designed for STEM education",
                    "icon": "🎓",
                    "display_order": 1,
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(None, max_length=500)
    icon: str | None = Field(None, max_length=50)
    display_order: int = 0
    status: Literal["active", "inactive"] | None = None


class UpdateCategoryRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = Field(None, max_length=500)
    icon: str | None = Field(None, max_length=50)
    display_order: int | None = None
    status: Literal["active", "inactive"] | None = None


class CategoryResponse(BaseModel):
    id: str
    name: str
    slug: str
    description: str | None = None
    icon: str | None = None
    display_order: int
    status: str
    product_count: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_category(cls, category) -> CategoryResponse:
        return cls(
            id=str(category.id),
            name=category.name,
            slug=category.slug,
            description=category.description,
            icon=category.icon,
            display_order=category.display_order or 0,
            status=category.status,
            product_count=category.product_count or 0,
            created_at=category.created_at,
            updated_at=category.updated_at,
        )


class CategoryListResponse(BaseModel):
    data: list[CategoryResponse]
    count: int


# ---------------------------------------------------------------------------
# Product
# ---------------------------------------------------------------------------
class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "RoboKit Explorer",
                    "description": "A programmable rover kit for beginners.",
                    "price": 149.99,
                    "discount_price": 129.99,
                    "category_id": "5b0c2d8e-8a53-4f4e-9f0e-6d1c3a2b4f10",
                    "stock": 25,
                    "featured": True,
                    "tags": ["stem", "kids"],
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=2000)
    price: float = Field(..., ge=0)
    discount_price: float | None = Field(None, ge=0)
    category_id: str
    stock: int = Field(0, ge=0)
    status: Literal["active", "inactive", "discontinued"] | None = None
    featured: bool = False
    tags: list[str] | None = None


class UpdateProductRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, min_length=1, max_length=2000)
    price: float | None = Field(None, ge=0)
    discount_price: float | None = Field(None, ge=0)
    category_id: str | None = None
    stock: int | None = Field(None, ge=0)
    status: Literal["active", "inactive", "discontinued"] | None = None
    featured: bool | None = None
    tags: list[str] | None = None


class ProductResponse(BaseModel):
    id: str
    name: str
    slug: str
    description: str
    price: float
    discount_price: float | None = None
    category_id: str
    stock: int
    in_stock: bool
    status: str
    featured: bool
    tags: list[str]
    rating: float
    num_reviews: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_product(cls, product) -> ProductResponse:
        return cls(
            id=str(product.id),
            name=product.name,
            slug=product.slug,
            description=product.description,
            price=product.price,
            discount_price=product.discount_price,
            category_id=str(product.category_id),
            stock=product.stock or 0,
            in_stock=bool(product.in_stock),
            status=product.status,
            featured=bool(product.featured),
            tags=product.tag_list,
            rating=product.rating or 0.0,
            num_reviews=product.num_reviews or 0,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


class ProductListResponse(BaseModel):
    data: list[ProductResponse]
    pagination: Pagination


# ---------------------------------------------------------------------------
# Review
# ---------------------------------------------------------------------------
class SubmitReviewRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "product_id": "5b0c2d8e-8a53-4f4e-9f0e-6d1c3a2b4f10",
                    "reviewer_name": "Ada",
                    "reviewer_email": "ada@example.com",
                    "rating": 5,
                    "comment": "My kids built it in an afternoon and loved it.",
                }
            ]
        }
    }

    product_id: str
    reviewer_name: str = Field(..., min_length=1, max_length=100)
    reviewer_email: str = Field(..., max_length=254)
    rating: int = Field(..., ge=1, le=5)
    comment: str = Field(..., min_length=1, max_length=1000)


class SetReviewStatusRequest(BaseModel):
    status: Literal["approved", "rejected"]


class ReviewResponse(BaseModel):
    id: str
    product_id: str
    reviewer_name: str
    reviewer_email: str | None = None  # moderators only
    rating: int
    comment: str
    status: str
    verified: bool
    helpful_count: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_review(cls, review, include_email: bool = False) -> ReviewResponse:
        return cls(
            id=str(review.id),
            product_id=str(review.product_id),
            reviewer_name=review.reviewer_name,
            reviewer_email=review.reviewer_email if include_email else None,
            rating=review.rating,
            comment=review.comment,
            status=review.status,
            verified=bool(review.verified),
            helpful_count=review.helpful_count or 0,
            created_at=review.created_at,
            updated_at=review.updated_at,
        )


class SubmitReviewResponse(BaseModel):
    message: str = "Review submitted successfully. It will be visible after approval."
    data: ReviewResponse


class ReviewListResponse(BaseModel):
    data: list[ReviewResponse]
    pagination: Pagination
