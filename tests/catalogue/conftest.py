import os

import pytest


@pytest.fixture(scope="session")
def _catalogue_domain(request):
    """Initialize the catalogue domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from catalogue.domain import catalogue

    catalogue.init()
    return catalogue


@pytest.fixture(scope="session", autouse=True)
def setup_db(_catalogue_domain):
    from shared.db import drop_db, setup_db

    setup_db(_catalogue_domain)

    yield

    drop_db(_catalogue_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_catalogue_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _catalogue_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


@pytest.fixture()
def category():
    """A persisted category."""
    from catalogue.category.category import Category
    from protean import current_domain

    category = Category.create(name="Robot Cleaners", description="Vacuum and floor robots")
    current_domain.repository_for(Category).add(category)
    return current_domain.repository_for(Category).get(category.id)


@pytest.fixture()
def make_product(category):
    """Factory persisting products in the ``category`` fixture."""
    from catalogue.product.product import Product
    from protean import current_domain

    def _make(name="RoboClean Pro X1", **overrides):
        fields = {
            "description": "Flagship robotic vacuum",
            "price": 599.99,
            "category_id": category.id,
            "stock": 10,
        }
        fields.update(overrides)
        product = Product.create(name=name, **fields)
        current_domain.repository_for(Product).add(product)
        return current_domain.repository_for(Product).get(product.id)

    return _make


@pytest.fixture()
def product(make_product):
    """A persisted product with no reviews."""
    return make_product()
