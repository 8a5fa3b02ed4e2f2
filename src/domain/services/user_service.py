"""User provisioning service."""

import logging
from collections.abc import Callable
from typing import ClassVar
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from domain.entities.user import User
from domain.repositories.unit_of_work import IUnitOfWork

logger = logging.getLogger(__name__)


class UserService:
    """Keeps the local User record in step with authenticated token subjects."""

    # In-memory cache of user IDs known to have a User record. Avoids a DB
    # round-trip on every authenticated request.
    _provisioned_users: ClassVar[set[UUID]] = set()

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    @classmethod
    def clear_provisioned_cache(cls) -> None:
        """Clear the provisioned-users cache. Intended for testing."""
        cls._provisioned_users.clear()

    @classmethod
    def forget(cls, user_id: UUID) -> None:
        """Drop a user from the cache after the record was deleted."""
        cls._provisioned_users.discard(user_id)

    async def ensure_user(
        self,
        user_id: UUID,
        email: str,
        display_name: str | None = None,
        avatar_url: str | None = None,
    ) -> User | None:
        """Create the User record for a token subject if it does not exist.

        Idempotent: returns None if the record already exists. Concurrent
        first requests race on the primary key; the loser's IntegrityError
        is treated as "already provisioned".
        """
        if user_id in self._provisioned_users:
            return None

        async with self._uow_factory() as uow:
            existing = await uow.users.get(user_id)
            if existing:
                self._provisioned_users.add(user_id)
                return None

            user = User(
                id=user_id,
                email=email,
                name=display_name or email.split("@")[0],
                avatar=avatar_url,
            )

            try:
                created = await uow.users.create(user)
                await uow.commit()
            except IntegrityError:
                await uow.rollback()
                # A concurrent request may have inserted the same id first;
                # anything else leaves the subject without a record.
                if await uow.users.get(user_id) is None:
                    raise
                self._provisioned_users.add(user_id)
                logger.debug("User %s already provisioned (race condition)", user_id)
                return None

            self._provisioned_users.add(user_id)
            logger.info("Provisioned user record for %s", user_id)
            return created
