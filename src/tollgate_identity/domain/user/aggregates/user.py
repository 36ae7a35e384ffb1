"""User aggregate: identity plus the secrets owned by the credential store."""

from datetime import datetime
from typing import Union

from tollgate.domain.shared.time import utc_now
from tollgate_identity.domain.user.value_objects import UserRole


class User:
    """
    User aggregate root.

    Carries the password hash and the current refresh-session hash. It
    must never leave the core as-is; outward paths use PublicUser.
    """

    def __init__(
        self,
        id: int,
        email: str,
        password_hash: str,
        role: Union[str, UserRole] = UserRole.USER,
        refresh_token_hash: str | None = None,
        display_name: str | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        self._id = id
        self._email = email
        self._password_hash = password_hash
        self._role = role if isinstance(role, UserRole) else UserRole(role)
        self._refresh_token_hash = refresh_token_hash
        self._display_name = display_name
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or utc_now()

    @property
    def id(self) -> int:
        return self._id

    @property
    def email(self) -> str:
        return self._email

    @property
    def password_hash(self) -> str:
        return self._password_hash

    @property
    def role(self) -> UserRole:
        return self._role

    @property
    def is_admin(self) -> bool:
        return self._role == UserRole.ADMIN

    @property
    def refresh_token_hash(self) -> str | None:
        return self._refresh_token_hash

    @property
    def has_active_session(self) -> bool:
        return self._refresh_token_hash is not None

    @property
    def display_name(self) -> str | None:
        return self._display_name

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"User(id={self._id}, email={self._email}, role={self._role.value})"
