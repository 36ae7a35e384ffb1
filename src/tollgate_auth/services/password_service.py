"""Password hashing service using bcrypt.

Provides secure hashing and verification of passwords and of refresh
tokens, plus password strength validation.
"""

import hashlib

import bcrypt

from tollgate_auth.exceptions import WeakPasswordError

# bcrypt only looks at the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72


class PasswordHasher:
    """Service for one-way hashing and verification of secrets.

    Uses bcrypt with a per-call random salt and a configurable work
    factor. The same service opacity-wraps refresh tokens before they
    are persisted, so a raw refresh token is never stored.

    Examples
    --------
    >>> hasher = PasswordHasher()
    >>> hashed = hasher.hash("my_secure_password")
    >>> hasher.verify("my_secure_password", hashed)
    True
    >>> hasher.verify("wrong_password", hashed)
    False
    """

    # Password requirements
    MIN_LENGTH = 8

    def __init__(self, rounds: int = 12):
        """Initialize the password hasher.

        Parameters
        ----------
        rounds
            The bcrypt work factor (log2 of iterations). Default is 12,
            which is a good balance of security and performance.
            Higher values are more secure but slower.
        """
        self._rounds = rounds
        # equalize_timing must cost exactly one checkpw, from the first call on
        self._dummy_hash = self._hash_bytes(b"tollgate_timing_dummy")

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, password: str) -> str:
        """Hash a plaintext password.

        Parameters
        ----------
        password
            The plaintext password to hash

        Returns
        -------
        The bcrypt hash as a string

        Raises
        ------
        WeakPasswordError
            If password doesn't meet requirements
        """
        self.validate_strength(password)
        return self._hash_bytes(password.encode("utf-8"))

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against a hash.

        Parameters
        ----------
        password
            The plaintext password to check
        password_hash
            The bcrypt hash to verify against

        Returns
        -------
        True if password matches, False otherwise
        """
        return self._check_bytes(password.encode("utf-8"), password_hash)

    def hash_token(self, token: str) -> str:
        """Hash a refresh token for storage.

        Tokens are reduced with SHA-256 first. Two JWTs for the same user
        can share their first 72 bytes, and bcrypt would treat them as
        equal without the digest step.
        """
        return self._hash_bytes(self._token_digest(token))

    def verify_token(self, token: str, token_hash: str) -> bool:
        """Verify a presented refresh token against its stored hash."""
        return self._check_bytes(self._token_digest(token), token_hash)

    def equalize_timing(self, password: str) -> None:
        """Spend one bcrypt verification on a throwaway hash.

        Called when the account does not exist so the response time does
        not reveal whether the email is registered.
        """
        self._check_bytes(password.encode("utf-8"), self._dummy_hash)

    def validate_strength(self, password: str) -> None:
        """Validate that a password meets strength requirements.

        Current requirements:
        - Minimum 8 characters
        - Maximum 72 bytes once UTF-8 encoded (bcrypt input limit)

        Parameters
        ----------
        password
            The password to validate

        Raises
        ------
        WeakPasswordError
            If password doesn't meet requirements
        """
        if not password:
            msg = "Password cannot be empty"
            raise WeakPasswordError(msg)

        if len(password) < self.MIN_LENGTH:
            msg = f"Password must be at least {self.MIN_LENGTH} characters"
            raise WeakPasswordError(msg)

        if len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
            msg = f"Password cannot exceed {BCRYPT_MAX_BYTES} bytes"
            raise WeakPasswordError(msg)

    def needs_rehash(self, password_hash: str) -> bool:
        """Check if a hash was produced with a different work factor.

        Parameters
        ----------
        password_hash
            The existing hash to check

        Returns
        -------
        True if the hash should be regenerated
        """
        try:
            # bcrypt format: $2b$XX$...
            parts = password_hash.split("$")
            if len(parts) >= 3:
                return int(parts[2]) != self._rounds
        except (ValueError, IndexError):
            pass
        return True

    def _hash_bytes(self, secret: bytes) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(secret, salt).decode("utf-8")

    def _check_bytes(self, secret: bytes, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(secret, hashed.encode("utf-8"))
        except (ValueError, TypeError):
            # Invalid hash format or input longer than bcrypt accepts
            return False

    @staticmethod
    def _token_digest(token: str) -> bytes:
        return hashlib.sha256(token.encode("utf-8")).hexdigest().encode("ascii")
