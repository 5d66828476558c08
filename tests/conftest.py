import os

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Select the config overlay before any domain is initialized. Each bounded
    context's conftest initializes its own domain and pushes its context.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env


_DIRECTORY_MARKERS = {
    "domain": "domain",
    "application": "application",
    "integration": "integration",
    "bdd": "bdd",
}


def pytest_collection_modifyitems(config, items):
    """Mark tests by the layer directory they live in."""
    for item in items:
        parts = item.path.parts
        for directory, marker in _DIRECTORY_MARKERS.items():
            if directory in parts:
                item.add_marker(getattr(pytest.mark, marker))

        # API tests go through routing and serialization
        if "integration" in parts and item.get_closest_marker("fast") is None:
            item.add_marker(pytest.mark.slow)


@pytest.fixture()
def moderator():
    from shared.auth import CallerContext

    return CallerContext(subject="admin-001", role="admin")


@pytest.fixture()
def shopper():
    from shared.auth import CallerContext

    return CallerContext(subject="user-001", role="customer")
