"""FastAPI endpoints for the Catalogue domain.

Routes translate between Pydantic schemas and the catalogue services, which
process the commands and keep the denormalized counts and ratings current.
"""

from fastapi import APIRouter, Depends, Query

from catalogue.api.schemas import (
    CategoryListResponse,
    CategoryResponse,
    CreateCategoryRequest,
    CreateProductRequest,
    Pagination,
    ProductListResponse,
    ProductResponse,
    ReviewListResponse,
    ReviewResponse,
    SetReviewStatusRequest,
    StatusResponse,
    SubmitReviewRequest,
    SubmitReviewResponse,
    UpdateCategoryRequest,
    UpdateProductRequest,
)
from catalogue.category.directory import CategoryDirectory
from catalogue.product.catalog import ProductCatalog
from catalogue.review.lifecycle import ReviewLifecycle
from shared.auth import CallerContext, current_caller, is_moderator

product_router = APIRouter(prefix="/products", tags=["products"])
category_router = APIRouter(prefix="/categories", tags=["categories"])
review_router = APIRouter(prefix="/reviews", tags=["reviews"])

products = ProductCatalog()
categories = CategoryDirectory()
reviews = ReviewLifecycle()


# --- Product endpoints ---


@product_router.post("", status_code=201, response_model=ProductResponse)
async def create_product(
    body: CreateProductRequest, caller: CallerContext = Depends(current_caller)
) -> ProductResponse:
    product = products.create(caller=caller, **body.model_dump())
    return ProductResponse.from_product(product)


@product_router.get("", response_model=ProductListResponse)
async def list_products(
    category_id: str | None = None,
    status: str | None = None,
    featured: bool | None = None,
    in_stock: bool | None = None,
    min_rating: float | None = Query(None, ge=0, le=5),
    min_price: float | None = Query(None, ge=0),
    max_price: float | None = Query(None, ge=0),
    page: int = Query(1, ge=1),
    limit: int = Query(12, ge=1, le=100),
) -> ProductListResponse:
    items, total = products.list(
        category_id=category_id,
        status=status,
        featured=featured,
        in_stock=in_stock,
        min_rating=min_rating,
        min_price=min_price,
        max_price=max_price,
        page=page,
        limit=limit,
    )
    return ProductListResponse(
        data=[ProductResponse.from_product(p) for p in items],
        pagination=Pagination.of(page, limit, total),
    )


@product_router.get("/{id_or_slug}", response_model=ProductResponse)
async def get_product(id_or_slug: str) -> ProductResponse:
    return ProductResponse.from_product(products.get(id_or_slug))


@product_router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str, body: UpdateProductRequest, caller: CallerContext = Depends(current_caller)
) -> ProductResponse:
    product = products.update(product_id, caller=caller, **body.model_dump())
    return ProductResponse.from_product(product)


@product_router.delete("/{product_id}", response_model=StatusResponse)
async def delete_product(product_id: str, caller: CallerContext = Depends(current_caller)) -> StatusResponse:
    products.delete(product_id, caller=caller)
    return StatusResponse()


# --- Category endpoints ---


@category_router.post("", status_code=201, response_model=CategoryResponse)
async def create_category(
    body: CreateCategoryRequest, caller: CallerContext = Depends(current_caller)
) -> CategoryResponse:
    category = categories.create(caller=caller, **body.model_dump())
    return CategoryResponse.from_category(category)


@category_router.get("", response_model=CategoryListResponse)
async def list_categories(status: str | None = None) -> CategoryListResponse:
    items = categories.list(status=status)
    return CategoryListResponse(data=[CategoryResponse.from_category(c) for c in items], count=len(items))


@category_router.get("/{id_or_slug}", response_model=CategoryResponse)
async def get_category(id_or_slug: str) -> CategoryResponse:
    return CategoryResponse.from_category(categories.get(id_or_slug))


@category_router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: str, body: UpdateCategoryRequest, caller: CallerContext = Depends(current_caller)
) -> CategoryResponse:
    category = categories.update(category_id, caller=caller, **body.model_dump())
    return CategoryResponse.from_category(category)


@category_router.delete("/{category_id}", response_model=StatusResponse)
async def delete_category(category_id: str, caller: CallerContext = Depends(current_caller)) -> StatusResponse:
    categories.delete(category_id, caller=caller)
    return StatusResponse()


# --- Review endpoints ---


@review_router.post("", status_code=201, response_model=SubmitReviewResponse)
async def submit_review(body: SubmitReviewRequest) -> SubmitReviewResponse:
    """Submit a review. It stays hidden until a moderator approves it."""
    review = reviews.submit(
        product_id=body.product_id,
        reviewer_name=body.reviewer_name,
        reviewer_email=body.reviewer_email,
        rating=body.rating,
        comment=body.comment,
    )
    return SubmitReviewResponse(data=ReviewResponse.from_review(review))


@review_router.get("", response_model=ReviewListResponse)
async def list_reviews(
    product_id: str | None = None,
    status: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    caller: CallerContext = Depends(current_caller),
) -> ReviewListResponse:
    items, total = reviews.list_reviews(
        caller=caller, product_id=product_id, status=status, page=page, limit=limit
    )
    moderator = is_moderator(caller)
    return ReviewListResponse(
        data=[ReviewResponse.from_review(r, include_email=moderator) for r in items],
        pagination=Pagination.of(page, limit, total),
    )


@review_router.get("/product/{product_id}", response_model=ReviewListResponse)
async def list_product_reviews(
    product_id: str,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
) -> ReviewListResponse:
    """Approved reviews for one product."""
    items, total = reviews.list_approved(product_id, page=page, limit=limit)
    return ReviewListResponse(
        data=[ReviewResponse.from_review(r) for r in items],
        pagination=Pagination.of(page, limit, total),
    )


@review_router.get("/{review_id}", response_model=ReviewResponse)
async def get_review(review_id: str, caller: CallerContext = Depends(current_caller)) -> ReviewResponse:
    review = reviews.get(review_id, caller=caller)
    return ReviewResponse.from_review(review, include_email=is_moderator(caller))


@review_router.put("/{review_id}/approve", response_model=ReviewResponse)
async def approve_review(review_id: str, caller: CallerContext = Depends(current_caller)) -> ReviewResponse:
    return ReviewResponse.from_review(reviews.approve(review_id, caller=caller), include_email=True)


@review_router.put("/{review_id}/reject", response_model=ReviewResponse)
async def reject_review(review_id: str, caller: CallerContext = Depends(current_caller)) -> ReviewResponse:
    return ReviewResponse.from_review(reviews.reject(review_id, caller=caller), include_email=True)


@review_router.put("/{review_id}/status", response_model=ReviewResponse)
async def set_review_status(
    review_id: str, body: SetReviewStatusRequest, caller: CallerContext = Depends(current_caller)
) -> ReviewResponse:
    review = reviews.set_status(review_id, body.status, caller=caller)
    return ReviewResponse.from_review(review, include_email=True)


@review_router.delete("/{review_id}", response_model=StatusResponse)
async def delete_review(review_id: str, caller: CallerContext = Depends(current_caller)) -> StatusResponse:
    reviews.delete(review_id, caller=caller)
    return StatusResponse()


@review_router.put("/{review_id}/helpful", response_model=ReviewResponse)
async def mark_review_helpful(review_id: str, caller: CallerContext = Depends(current_caller)) -> ReviewResponse:
    return ReviewResponse.from_review(reviews.mark_helpful(review_id, caller=caller))
