from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import WriteFailureError
from src.platform.logging.loguru_io import Logger


class SqlAlchemyRepoBase:
    """
    Session plumbing shared by the repositories.

    Standalone, each write opens a session and commits it. Inside a unit of
    work the UoW injects ``session`` and owns commit/rollback.
    """

    def __init__(
        self, session_factory: Callable[..., AsyncContextManager[AsyncSession]] | None = None
    ) -> None:
        self.session_factory = session_factory
        self.session: AsyncSession | None = None

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        if self.session is not None:
            yield self.session
        elif self.session_factory is not None:
            async with self.session_factory() as session:
                yield session
        else:
            raise RuntimeError('No session or session_factory available')

    @asynccontextmanager
    async def _write_session(self, operation: str) -> AsyncIterator[AsyncSession]:
        try:
            async with self._get_session() as session:
                yield session
                if self.session is None:
                    await session.commit()
        except SQLAlchemyError as e:
            Logger.base.error(f'🗄️ [DB] {operation} failed: {type(e).__name__}: {e}')
            raise WriteFailureError(f'Could not {operation}') from e
