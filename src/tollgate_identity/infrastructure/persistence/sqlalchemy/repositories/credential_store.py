"""SQLAlchemy implementation of CredentialStore.

Each call runs in its own session and transaction, so every mutation is
a single atomic row write. Refresh-hash rotation is a conditional UPDATE
(compare-and-set) so that two concurrent rotations cannot both win.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import ColumnElement, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tollgate.domain.shared.time import ensure_tz_aware, utc_now
from tollgate_identity.domain.user import (
    CredentialStore,
    EmailAlreadyExistsError,
    StorageError,
    User,
    UserRole,
)
from tollgate_identity.infrastructure.persistence.sqlalchemy.models import UserModel

logger = logging.getLogger(__name__)


class CredentialStoreSQLAlchemy(CredentialStore):
    """SQLAlchemy implementation of the CredentialStore interface."""

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]) -> None:
        """Initialize the store with a session factory.

        Parameters
        ----------
        session_maker
            Factory for async sessions; one session is opened per call
        """
        self._session_maker = session_maker

    async def find_by_email(self, email: str) -> User | None:
        async with self._transaction("find_by_email") as session:
            stmt = select(UserModel).where(UserModel.email == email)
            result = await session.execute(stmt)
            model = result.scalar_one_or_none()
            return self._map_to_domain(model) if model else None

    async def find_by_id(self, user_id: int) -> User | None:
        async with self._transaction("find_by_id") as session:
            model = await session.get(UserModel, user_id)
            return self._map_to_domain(model) if model else None

    async def create(
        self,
        email: str,
        password_hash: str,
        role: UserRole,
        display_name: str | None = None,
    ) -> User:
        async with self._transaction("create") as session:
            model = UserModel(
                email=email,
                password_hash=password_hash,
                role=role.value,
                display_name=display_name,
                refresh_token_hash=None,
            )
            session.add(model)
            try:
                await session.flush()
            except IntegrityError as e:
                if "UNIQUE constraint failed" in str(e) or "unique" in str(e).lower():
                    raise EmailAlreadyExistsError(email) from e
                raise

            logger.info("Created user: %s (role: %s)", model.id, role.value)
            return self._map_to_domain(model)

    async def set_refresh_hash(self, user_id: int, refresh_hash: str | None) -> None:
        async with self._transaction("set_refresh_hash") as session:
            stmt = (
                update(UserModel)
                .where(UserModel.id == user_id)
                .values(refresh_token_hash=refresh_hash, updated_at=utc_now())
                .execution_options(synchronize_session=False)
            )
            await session.execute(stmt)

    async def update_display_name(
        self,
        user_id: int,
        display_name: str | None,
    ) -> User | None:
        async with self._transaction("update_display_name") as session:
            model = await session.get(UserModel, user_id)
            if model is None:
                return None
            model.display_name = display_name
            model.updated_at = utc_now()
            await session.flush()
            return self._map_to_domain(model)

    async def compare_and_set_refresh_hash(
        self,
        user_id: int,
        expected: str | None,
        new: str | None,
    ) -> bool:
        async with self._transaction("compare_and_set_refresh_hash") as session:
            stmt = (
                update(UserModel)
                .where(UserModel.id == user_id, self._hash_matches(expected))
                .values(refresh_token_hash=new, updated_at=utc_now())
                .execution_options(synchronize_session=False)
            )
            result = await session.execute(stmt)
            return result.rowcount == 1

    @asynccontextmanager
    async def _transaction(self, operation: str) -> AsyncIterator[AsyncSession]:
        try:
            async with self._session_maker() as session, session.begin():
                yield session
        except SQLAlchemyError as e:
            logger.error("Credential store %s failed: %s", operation, e)
            raise StorageError(operation) from e

    @staticmethod
    def _hash_matches(expected: str | None) -> ColumnElement[bool]:
        if expected is None:
            return UserModel.refresh_token_hash.is_(None)
        return UserModel.refresh_token_hash == expected

    def _map_to_domain(self, model: UserModel) -> User:
        return User(
            id=model.id,
            email=model.email,
            password_hash=model.password_hash,
            role=model.role,
            refresh_token_hash=model.refresh_token_hash,
            display_name=model.display_name,
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
        )
