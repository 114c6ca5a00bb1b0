"""Composition root: builds the database-backed unit of work from settings.

The engine is built, and the schema created, once per process on first use.
"""

from __future__ import annotations

from decimal import Decimal
from functools import lru_cache

from sqlalchemy.orm import Session, sessionmaker

from storefront.infrastructure.config import get_settings
from storefront.infrastructure.persistence.database import (
    build_engine,
    build_session_factory,
    init_db,
)
from storefront.infrastructure.persistence.unit_of_work import SqlAlchemyUnitOfWork


@lru_cache
def _session_factory() -> sessionmaker[Session]:
    settings = get_settings()
    settings.DATA_ROOT.mkdir(parents=True, exist_ok=True)
    engine = build_engine(settings.database_url, echo=settings.DB_ECHO)
    init_db(engine)
    return build_session_factory(engine)


def unit_of_work() -> SqlAlchemyUnitOfWork:
    return SqlAlchemyUnitOfWork(_session_factory())


def vat_rate() -> Decimal:
    return get_settings().VAT_RATE
