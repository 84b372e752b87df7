"""
SQLAlchemy async engine and session management

- PostgreSQL (asyncpg): pooled engine, pool sizing from settings
- SQLite (aiosqlite): embedded store for local runs and tests, NullPool so every
  session opens its own connection on the current event loop
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy import MetaData, event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger


NAMING_CONVENTION = {
    'ix': 'ix_%(column_0_label)s',
    'uq': 'uq_%(table_name)s_%(column_0_name)s',
    'ck': 'ck_%(table_name)s_%(constraint_name)s',
    'fk': 'fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s',
    'pk': 'pk_%(table_name)s',
}


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)


def _configure_sqlite_connection(dbapi_connection, connection_record) -> None:
    # Driver-level autocommit; transactions are opened explicitly by _begin_immediate
    dbapi_connection.isolation_level = None
    cursor = dbapi_connection.cursor()
    cursor.execute('PRAGMA foreign_keys=ON')
    cursor.close()


def _begin_immediate(conn) -> None:
    # Take the write lock up front so two units never deadlock upgrading a read lock
    conn.exec_driver_sql('BEGIN IMMEDIATE')


def build_engine(db_url: str) -> AsyncEngine:
    url = make_url(db_url)
    if url.get_backend_name() == 'sqlite':
        engine = create_async_engine(
            db_url,
            echo=False,
            poolclass=NullPool,
            connect_args={'timeout': 30},
        )
        event.listen(engine.sync_engine, 'connect', _configure_sqlite_connection)
        event.listen(engine.sync_engine, 'begin', _begin_immediate)
        return engine

    return create_async_engine(
        db_url,
        echo=False,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_POOL_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,
        pool_pre_ping=settings.DB_POOL_PRE_PING,
    )


class Database:
    """
    Engine + session factory for dependency injection

    Usage:
        database = Database(db_url=settings.DATABASE_URL_ASYNC)
        async with database.session() as session:
            ...
    """

    def __init__(self, *, db_url: str) -> None:
        self.db_url = db_url
        self._engine: Optional[AsyncEngine] = None
        self._session_maker: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            self._engine = build_engine(self.db_url)
            Logger.base.info(f'🔗 [DB] Engine created for {make_url(self.db_url).get_backend_name()}')
        return self._engine

    @property
    def session_maker(self) -> async_sessionmaker[AsyncSession]:
        if self._session_maker is None:
            self._session_maker = async_sessionmaker(
                self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
            )
        return self._session_maker

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        async with self.session_maker() as session:
            yield session

    async def create_tables(self) -> None:
        """Create tables that do not exist yet (embedded deployments and tests)"""
        # Register every mapped model on Base.metadata before create_all
        import src.service.catalog.driven_adapter.model  # noqa: F401
        import src.service.reservation.driven_adapter.model  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all, checkfirst=True)
        Logger.base.info('🗄️ [DB] Tables ready')

    async def drop_tables(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_maker = None
