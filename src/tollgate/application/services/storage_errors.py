"""Translation of storage failures into the shared error taxonomy."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from tollgate.domain.shared.exceptions import InternalError
from tollgate_identity.domain.user import StorageError

logger = logging.getLogger(__name__)


@contextmanager
def storage_failures(operation: str) -> Iterator[None]:
    """Turn a StorageError raised inside the block into an InternalError.

    The failure is logged with its traceback here; the InternalError that
    reaches the caller carries only the failed operation's name.
    """
    try:
        yield
    except StorageError as e:
        logger.exception("Storage failure during %s", operation)
        raise InternalError(details={"operation": e.operation}) from e
