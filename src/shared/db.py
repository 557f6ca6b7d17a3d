"""Database schema management shared by the catalogue and ordering domains."""

from protean.domain import Domain
from sqlalchemy import create_engine

# Aggregates that only ever live in memory and must not get tables
TRANSIENT_AGGREGATES = frozenset({"ShoppingCart"})


def _is_transient(cls) -> bool:
    if cls.__name__ in TRANSIENT_AGGREGATES:
        return True
    part_of = getattr(cls.meta_, "part_of", None)
    name = part_of if isinstance(part_of, str) else getattr(part_of, "__name__", None)
    return name in TRANSIENT_AGGREGATES


def _persisted_classes(domain: Domain, provider_name: str):
    registry = domain.registry
    for records in (registry.aggregates, registry.entities, registry.projections):
        for _, record in records.items():
            cls = record.cls
            if cls.meta_.provider == provider_name and not _is_transient(cls):
                yield cls


def setup_db(domain: Domain):
    """Setup database schema"""
    with domain.domain_context():
        for _, provider in domain.providers.items():
            if provider.conn_info["provider"] in ("sqlite", "postgresql"):
                engine = create_engine(provider.conn_info["database_uri"])

                # Touching the DAO registers the table on the provider's metadata
                for cls in _persisted_classes(domain, provider.name):
                    domain.repository_for(cls)._dao  # noqa: B018

                # Force DAO creation for outbox tables (registered as internal)
                if hasattr(domain, "_outbox_repos") and provider.name in domain._outbox_repos:
                    domain._outbox_repos[provider.name]._dao  # noqa: B018

                provider._metadata.create_all(engine)


def drop_db(domain: Domain):
    """Drop database schema"""
    with domain.domain_context():
        for _, provider in domain.providers.items():
            if provider.conn_info["provider"] in ("sqlite", "postgresql"):
                engine = create_engine(provider.conn_info["database_uri"])
                provider._metadata.drop_all(engine)
