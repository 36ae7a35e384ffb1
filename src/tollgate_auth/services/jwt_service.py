"""JWT token service.

Provides access and refresh token creation and verification, each kind
bound to its own signing secret and lifetime.
"""

from datetime import timedelta

from tollgate_auth.schemas import (
    ACCESS_TOKEN_TYPE,
    REFRESH_TOKEN_TYPE,
    TokenClaims,
    TokenPair,
    TokenSubject,
)
from tollgate_auth.services.token_codec import TokenCodec


class JWTService:
    """Service for JWT token creation and verification.

    Handles access tokens (short-lived) and refresh tokens (long-lived)
    for user authentication. The two kinds use distinct secrets, so an
    access token never verifies as a refresh token and vice versa.

    Examples
    --------
    >>> service = JWTService(access_secret="a" * 32, refresh_secret="r" * 32)
    >>> token = service.create_access_token(TokenSubject(1, "user@example.com", "USER"))
    >>> claims = service.verify_access_token(token)
    >>> print(claims.user_id)
    """

    DEFAULT_ACCESS_EXPIRE_MINUTES = 15
    DEFAULT_REFRESH_EXPIRE_DAYS = 7

    def __init__(
        self,
        access_secret: str,
        refresh_secret: str,
        access_token_expire_minutes: int = DEFAULT_ACCESS_EXPIRE_MINUTES,
        refresh_token_expire_days: int = DEFAULT_REFRESH_EXPIRE_DAYS,
        codec: TokenCodec | None = None,
    ):
        """Initialize the JWT service.

        Parameters
        ----------
        access_secret
            Secret for signing access tokens. Must be kept secure.
        refresh_secret
            Secret for signing refresh tokens. Must differ from
            ``access_secret``.
        access_token_expire_minutes
            Minutes until access token expires (default 15)
        refresh_token_expire_days
            Days until refresh token expires (default 7)
        codec
            Token codec to use (default TokenCodec())
        """
        if not access_secret or not refresh_secret:
            msg = "JWT secret key cannot be empty"
            raise ValueError(msg)
        if access_secret == refresh_secret:
            msg = "Access and refresh secrets must differ"
            raise ValueError(msg)

        self._access_secret = access_secret
        self._refresh_secret = refresh_secret
        self._access_expire = timedelta(minutes=access_token_expire_minutes)
        self._refresh_expire = timedelta(days=refresh_token_expire_days)
        self._codec = codec or TokenCodec()

    @property
    def access_token_ttl(self) -> timedelta:
        return self._access_expire

    @property
    def refresh_token_ttl(self) -> timedelta:
        return self._refresh_expire

    def create_access_token(
        self,
        subject: TokenSubject,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create a short-lived access token.

        Parameters
        ----------
        subject
            Identity claims to embed
        expires_delta
            Custom expiration time (optional)

        Returns
        -------
        The encoded JWT token string
        """
        return self._codec.issue(
            subject,
            self._access_secret,
            expires_delta or self._access_expire,
            ACCESS_TOKEN_TYPE,
        )

    def create_refresh_token(
        self,
        subject: TokenSubject,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create a long-lived refresh token.

        Refresh tokens are used to obtain new access tokens without
        requiring the user to log in again.
        """
        return self._codec.issue(
            subject,
            self._refresh_secret,
            expires_delta or self._refresh_expire,
            REFRESH_TOKEN_TYPE,
        )

    def create_token_pair(self, subject: TokenSubject) -> TokenPair:
        return TokenPair(
            access_token=self.create_access_token(subject),
            refresh_token=self.create_refresh_token(subject),
            access_expires_in=int(self._access_expire.total_seconds()),
        )

    def verify_access_token(self, token: str) -> TokenClaims:
        """Verify an access token.

        Raises
        ------
        InvalidTokenError
            If token is invalid, expired, malformed or not an access token
        """
        return self._codec.verify(token, self._access_secret, ACCESS_TOKEN_TYPE)

    def verify_refresh_token(self, token: str) -> TokenClaims:
        """Verify a refresh token.

        Raises
        ------
        InvalidTokenError
            If token is invalid, expired, malformed or not a refresh token
        """
        return self._codec.verify(token, self._refresh_secret, REFRESH_TOKEN_TYPE)
