"""User domain exceptions.

Raised by credential store implementations. The application layer
translates them into the shared error taxonomy.
"""


class EmailAlreadyExistsError(Exception):
    """Email already registered."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"Email already registered: {email}")


class StorageError(Exception):
    """The credential store could not complete an operation."""

    def __init__(self, operation: str, message: str = "Storage failure") -> None:
        self.operation = operation
        super().__init__(f"{message} during {operation}")
