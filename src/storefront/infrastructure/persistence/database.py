"""SQLAlchemy engine, session factory and declarative base.

SQLite has no ``SELECT ... FOR UPDATE``.  To get the same guarantee for
the credit balance read-modify-write, SQLite connections open every
transaction with ``BEGIN IMMEDIATE``, which takes the database write
lock up front and makes concurrent transactions queue behind it.
"""

from __future__ import annotations

from sqlalchemy import Engine, MetaData, create_engine, event
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

_NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Declarative base for ORM rows."""

    metadata = MetaData(naming_convention=_NAMING_CONVENTION)


def build_engine(url: str, echo: bool = False) -> Engine:
    if url.startswith("sqlite"):
        engine = create_engine(
            url, echo=echo, connect_args={"check_same_thread": False}
        )
        _use_immediate_transactions(engine)
        return engine
    return create_engine(url, echo=echo, pool_pre_ping=True)


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)


def init_db(engine: Engine) -> None:
    """Create missing tables. There are no migrations for this schema."""
    # Import for side effect: registers every table on Base.metadata.
    from storefront.infrastructure.persistence import tables  # noqa: F401

    Base.metadata.create_all(engine)


def _use_immediate_transactions(engine: Engine) -> None:

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record) -> None:
        # Stop pysqlite from issuing its own BEGIN.
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn) -> None:
        conn.exec_driver_sql("BEGIN IMMEDIATE")
