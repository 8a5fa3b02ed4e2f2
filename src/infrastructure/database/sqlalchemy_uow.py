"""SQLAlchemy Unit of Work implementation."""

from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from infrastructure.database.repositories.sqlalchemy_post_repo import SQLAlchemyPostRepository
from infrastructure.database.repositories.sqlalchemy_profile_repo import (
    SQLAlchemyProfileRepository,
)
from infrastructure.database.repositories.sqlalchemy_user_repo import SQLAlchemyUserRepository


class SQLAlchemyUnitOfWork:
    """One session and one transaction per aggregate operation.

    Repositories are bound to the session when the unit of work is entered.
    Leaving it without ``commit()`` discards every pending write.
    """

    users: SQLAlchemyUserRepository
    profiles: SQLAlchemyProfileRepository
    posts: SQLAlchemyPostRepository

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None

    async def __aenter__(self) -> "SQLAlchemyUnitOfWork":
        if self._session is not None:
            raise RuntimeError("UnitOfWork is already in use")
        self._session = self._session_factory()
        self.users = SQLAlchemyUserRepository(self._session)
        self.profiles = SQLAlchemyProfileRepository(self._session)
        self.posts = SQLAlchemyPostRepository(self._session)
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[Exception],
        exc_tb: Any,
    ) -> None:
        session, self._session = self._session, None
        if session is None:
            return
        try:
            if exc_type:
                await session.rollback()
        finally:
            await session.close()

    async def commit(self) -> None:
        """Commit the current transaction."""
        await self._require_session().commit()

    async def rollback(self) -> None:
        """Roll back the current transaction."""
        await self._require_session().rollback()

    def _require_session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("UnitOfWork not initialized. Use as context manager.")
        return self._session
