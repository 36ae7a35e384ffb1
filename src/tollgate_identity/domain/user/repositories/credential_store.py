"""Abstract credential store interface.

This interface defines the contract for user record persistence.
Implementations can use SQLAlchemy or any other storage, as long as each
mutation is a single atomic row write.
"""

from abc import ABC, abstractmethod

from tollgate_identity.domain.user.aggregates import User
from tollgate_identity.domain.user.value_objects import UserRole


class CredentialStore(ABC):
    """
    Repository interface for user records and their session hash.

    Every method may raise StorageError. No operation spans more than one
    user, and callers never cache the returned records across calls.

    Example implementation:
        class CredentialStoreSQLAlchemy(CredentialStore):
            def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
                self._session_maker = session_maker

            async def find_by_id(self, user_id: int) -> User | None:
                # SQLAlchemy-specific implementation
                ...
    """

    @abstractmethod
    async def find_by_email(self, email: str) -> User | None:
        """Find a user by exact (case-sensitive) email."""

    @abstractmethod
    async def find_by_id(self, user_id: int) -> User | None:
        """Find a user by numeric id."""

    @abstractmethod
    async def create(
        self,
        email: str,
        password_hash: str,
        role: UserRole,
        display_name: str | None = None,
    ) -> User:
        """
        Create a user with no active session.

        Raises
        ------
        EmailAlreadyExistsError
            If the email is already taken
        """

    @abstractmethod
    async def set_refresh_hash(self, user_id: int, refresh_hash: str | None) -> None:
        """
        Unconditionally replace (or clear, with None) the session hash.

        Unknown user ids are ignored.
        """

    @abstractmethod
    async def update_display_name(
        self,
        user_id: int,
        display_name: str | None,
    ) -> User | None:
        """Replace the display name; returns the updated user, or None if unknown."""

    @abstractmethod
    async def compare_and_set_refresh_hash(
        self,
        user_id: int,
        expected: str | None,
        new: str | None,
    ) -> bool:
        """
        Replace the session hash only if it still equals ``expected``.

        Returns
        -------
        True if the swap happened, False if another writer got there first
        """
