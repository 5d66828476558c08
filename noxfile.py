import nox

PYTHON_VERSIONS = ["3.11", "3.12", "3.13"]

nox.options.sessions = ["tests"]

# Reinstalled in every session: a cached wheel may carry a .so built for another interpreter.
_NATIVE_PACKAGES = ["psycopg2-binary"]


def _install(session: nox.Session) -> None:
    session.run("poetry", "install", "--all-extras", external=True)
    session.run("pip", "install", "--force-reinstall", "--no-cache-dir", *_NATIVE_PACKAGES)


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Full suite on every supported interpreter."""
    _install(session)
    session.run("pytest", *session.posargs)


@nox.session(python=PYTHON_VERSIONS[-1])
def tests_domain(session: nox.Session) -> None:
    """Aggregate-level tests for both contexts; no API or database needed."""
    _install(session)
    session.run("pytest", "-m", "domain", *session.posargs)


@nox.session(python=PYTHON_VERSIONS[-1])
def tests_ratings(session: nox.Session) -> None:
    """Review moderation and product rating consistency."""
    _install(session)
    session.run("pytest", "-k", "review or rating", *session.posargs)


@nox.session(python=PYTHON_VERSIONS[-1])
def coverage(session: nox.Session) -> None:
    _install(session)
    session.run(
        "pytest",
        "--cov=catalogue",
        "--cov=contact",
        "--cov=shared",
        "--cov-report=term-missing",
        *session.posargs,
    )
