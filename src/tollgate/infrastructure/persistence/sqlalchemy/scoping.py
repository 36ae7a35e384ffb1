"""Ownership filtering for SQLAlchemy listing queries."""

from typing import Any, TypeVar

from sqlalchemy import Select
from sqlalchemy.orm import InstrumentedAttribute

SelectT = TypeVar("SelectT", bound=Select[Any])


def apply_owner_scope(
    stmt: SelectT,
    owner_column: InstrumentedAttribute[int],
    owner_id: int | None,
) -> SelectT:
    """Restrict a query to rows owned by ``owner_id``.

    Must be applied before ``limit``/``offset`` so that pages are cut from
    the already-filtered rows. ``owner_id`` comes from
    ``AuthorizationGuard.owner_scope``; None (an admin caller) returns the
    statement unchanged.

    Parameters
    ----------
    stmt
        The SELECT to restrict
    owner_column
        Column holding the owning user's id
    owner_id
        Owner to filter by, or None for no filter

    Returns
    -------
    The (possibly) filtered statement
    """
    if owner_id is None:
        return stmt
    return stmt.where(owner_column == owner_id)
