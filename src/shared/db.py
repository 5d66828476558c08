"""Schema management for SQL-backed providers.

With the in-memory provider both functions are no-ops. For ``sqlite`` and
``postgresql`` providers the repositories are touched first so that every
aggregate's table is registered on the provider metadata before
``create_all``.
"""

from protean.domain import Domain
from sqlalchemy import create_engine

SQL_PROVIDERS = ("sqlite", "postgresql")


def setup_db(domain: Domain):
    """Create tables for every aggregate the domain registers."""
    with domain.domain_context():
        for _, provider in domain.providers.items():
            if provider.conn_info["provider"] not in SQL_PROVIDERS:
                continue

            engine = create_engine(provider.conn_info["database_uri"])
            for _, aggregate_record in domain.registry.aggregates.items():
                if aggregate_record.cls.meta_.provider == provider.name:
                    domain.repository_for(aggregate_record.cls)._dao  # noqa: B018

            provider._metadata.create_all(engine)


def drop_db(domain: Domain):
    """Drop every table on the domain's SQL providers."""
    with domain.domain_context():
        for _, provider in domain.providers.items():
            if provider.conn_info["provider"] in SQL_PROVIDERS:
                engine = create_engine(provider.conn_info["database_uri"])
                provider._metadata.drop_all(engine)


def reset_data(domain: Domain):
    """Delete all records from every provider of the domain."""
    with domain.domain_context():
        for _, provider in domain.providers.items():
            provider._data_reset()
