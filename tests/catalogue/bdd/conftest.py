"""Shared BDD fixtures and step definitions for review moderation."""

import pytest
from catalogue.product.product import Product
from catalogue.review.lifecycle import ReviewLifecycle
from catalogue.review.review import Review, ReviewStatus
from protean import current_domain
from pytest_bdd import given, parsers, then


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def lifecycle():
    return ReviewLifecycle()


@pytest.fixture()
def outcome():
    """Container for the captured result or error of a when-step."""
    return {"review": None, "exc": None}


@pytest.fixture()
def review_by_email(product):
    """Look up the review a reviewer left on ``product``."""

    def _find(email):
        results = (
            current_domain.repository_for(Review)
            ._dao.query.filter(product_id=str(product.id), reviewer_email=email.lower())
            .all()
        )
        assert results.total == 1
        return results.items[0]

    return _find


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{name}" with no reviews'), target_fixture="product")
def product_with_no_reviews(make_product, name):
    return make_product(name=name)


@given(parsers.cfparse('"{email}" submitted a {rating:d} star review'))
def submitted_review(lifecycle, product, email, rating):
    lifecycle.submit(
        product_id=product.id,
        reviewer_name=email.split("@")[0],
        reviewer_email=email,
        rating=rating,
        comment=f"{rating} stars",
    )


@given(parsers.cfparse('an approved {rating:d} star review from "{email}"'))
def approved_review(lifecycle, product, moderator, email, rating):
    review = lifecycle.submit(
        product_id=product.id,
        reviewer_name=email.split("@")[0],
        reviewer_email=email,
        rating=rating,
        comment=f"{rating} stars",
    )
    lifecycle.approve(review.id, caller=moderator)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the product rating is {rating:f} from {count:d} reviews"))
def product_rating_is(product, rating, count):
    refreshed = current_domain.repository_for(Product).get(product.id)
    assert refreshed.rating == rating
    assert refreshed.num_reviews == count


@then(parsers.cfparse('the review from "{email}" is still pending'))
def review_is_pending(review_by_email, email):
    assert review_by_email(email).status == ReviewStatus.PENDING.value
