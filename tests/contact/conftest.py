import os

import pytest


@pytest.fixture(scope="session")
def _contact_domain(request):
    """Initialize the contact domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from contact.domain import contact

    contact.init()
    return contact


@pytest.fixture(scope="session", autouse=True)
def setup_db(_contact_domain):
    from shared.db import drop_db, setup_db

    setup_db(_contact_domain)

    yield

    drop_db(_contact_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_contact_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _contact_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()
