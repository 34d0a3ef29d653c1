"""
SQLAlchemy async engine and session management.

Writes always go to the primary. Reads go to the replica when
POSTGRES_REPLICA_SERVER is set, otherwise to the primary as well. Engines are
bound to the running event loop and rebuilt when the loop changes (pytest
creates a fresh loop per test module, the reconcile CLI runs its own loop).
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import orjson
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger


def _orjson_dumps(value: object) -> str:
    return orjson.dumps(value).decode()


class AsyncEngineManager:
    def __init__(self) -> None:
        self._engines: dict[bool, AsyncEngine] = {}
        self._session_makers: dict[bool, async_sessionmaker[AsyncSession]] = {}
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    def get_engine(self, *, read_only: bool = False) -> AsyncEngine:
        try:
            current_loop: Optional[asyncio.AbstractEventLoop] = asyncio.get_running_loop()
        except RuntimeError:
            current_loop = None

        if current_loop is not None and self._loop is not current_loop:
            if self._engines:
                # Cannot await dispose() from sync code; old pools are garbage collected
                Logger.base.warning('🔄 [DB] Event loop changed, dropping old engines')
            self._engines.clear()
            self._session_makers.clear()
            self._loop = current_loop
            Logger.base.info(f'🔗 [DB] Creating engines for event loop {id(current_loop)}')

        if read_only not in self._engines:
            self._engines[read_only] = self._create_engine(read_only=read_only)
        return self._engines[read_only]

    def get_session_maker(self, *, read_only: bool = False) -> async_sessionmaker[AsyncSession]:
        engine = self.get_engine(read_only=read_only)
        if read_only not in self._session_makers:
            self._session_makers[read_only] = async_sessionmaker(
                engine, class_=AsyncSession, expire_on_commit=False
            )
        return self._session_makers[read_only]

    async def dispose(self) -> None:
        for engine in self._engines.values():
            await engine.dispose()
        self._engines.clear()
        self._session_makers.clear()
        self._loop = None

    @staticmethod
    def _create_engine(*, read_only: bool) -> AsyncEngine:
        url = settings.DATABASE_READ_URL_ASYNC if read_only else settings.DATABASE_URL_ASYNC
        pool_size = settings.DB_POOL_SIZE_READ if read_only else settings.DB_POOL_SIZE_WRITE
        return create_async_engine(
            url,
            echo=False,
            pool_size=pool_size,
            max_overflow=settings.DB_POOL_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            pool_recycle=settings.DB_POOL_RECYCLE,
            pool_pre_ping=settings.DB_POOL_PRE_PING,
            # JSONB columns (idempotency results) go through orjson
            json_serializer=_orjson_dumps,
            json_deserializer=orjson.loads,
        )


_engine_manager = AsyncEngineManager()


def get_engine(*, read_only: bool = False) -> AsyncEngine:
    return _engine_manager.get_engine(read_only=read_only)


def get_session_maker(*, read_only: bool = False) -> async_sessionmaker[AsyncSession]:
    return _engine_manager.get_session_maker(read_only=read_only)


async def dispose_engines() -> None:
    await _engine_manager.dispose()


class Base(DeclarativeBase):
    pass


class Database:
    """Session provider handed to repositories through the DI container"""

    def __init__(self, *, read_only: bool = False) -> None:
        self._read_only = read_only

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        async with get_session_maker(read_only=self._read_only)() as session:
            yield session
