from protean.domain import Domain
from sqlalchemy import create_engine

from bookstore.utils.logging import get_logger

logger = get_logger(__name__)

SQL_PROVIDERS = ("sqlite", "postgresql")


def _register_tables(domain: Domain, provider) -> None:
    """Touch every repository DAO so the element's table lands in the provider's metadata."""
    records = [
        *domain.registry.aggregates.values(),
        *domain.registry.entities.values(),
    ]
    for record in records:
        if record.cls.meta_.provider == provider.name:
            domain.repository_for(record.cls)._dao  # noqa: B018


def setup_db(domain: Domain) -> None:
    """Create the SQL schema for every relational provider of the domain"""
    with domain.domain_context():
        for name, provider in domain.providers.items():
            if provider.conn_info["provider"] in SQL_PROVIDERS:
                engine = create_engine(provider.conn_info["database_uri"])
                _register_tables(domain, provider)
                provider._metadata.create_all(engine)
                engine.dispose()
                logger.info("db.schema_created", provider=name)


def drop_db(domain: Domain) -> None:
    """Drop the SQL schema for every relational provider of the domain"""
    with domain.domain_context():
        for name, provider in domain.providers.items():
            if provider.conn_info["provider"] in SQL_PROVIDERS:
                engine = create_engine(provider.conn_info["database_uri"])
                _register_tables(domain, provider)
                provider._metadata.drop_all(engine)
                engine.dispose()
                logger.info("db.schema_dropped", provider=name)
