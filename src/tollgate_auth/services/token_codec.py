"""Signed token encoding and verification.

Low-level codec: every call names the secret and lifetime explicitly so
that access and refresh tokens can never share a key by accident.
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt

from tollgate_auth.exceptions import InvalidTokenError
from tollgate_auth.schemas import TokenClaims, TokenSubject

REQUIRED_CLAIMS = ["sub", "email", "role", "type", "jti", "iat", "exp"]


class TokenCodec:
    """Issue and verify compact HS256 JWTs carrying identity claims."""

    ALGORITHM = "HS256"

    def issue(
        self,
        subject: TokenSubject,
        secret: str,
        ttl: timedelta,
        token_type: str,
    ) -> str:
        """Encode a signed token for ``subject``.

        Every token gets a fresh random ``jti``, so two tokens for the
        same subject are never byte-identical.
        """
        now = datetime.now(tz=timezone.utc)

        payload = {
            "sub": str(subject.user_id),
            "email": subject.email,
            "role": subject.role,
            "type": token_type,
            "jti": uuid4().hex,
            "iat": now,
            "exp": now + ttl,
        }

        return jwt.encode(payload, secret, algorithm=self.ALGORITHM)

    def verify(
        self,
        token: str,
        secret: str,
        expected_type: str | None = None,
    ) -> TokenClaims:
        """Verify signature, structure and expiry, then decode the claims.

        Parameters
        ----------
        token
            The encoded JWT
        secret
            Secret the token must have been signed with
        expected_type
            When given, the ``type`` claim must match it

        Raises
        ------
        InvalidTokenError
            On signature mismatch, corruption, missing claims, expiry,
            or a token type mismatch
        """
        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[self.ALGORITHM],
                options={"require": REQUIRED_CLAIMS},
            )

            claims = TokenClaims(
                user_id=int(payload["sub"]),
                email=payload["email"],
                role=payload["role"],
                token_id=payload["jti"],
                issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
                expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
                token_type=payload["type"],
            )

        except jwt.ExpiredSignatureError as e:
            raise InvalidTokenError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}") from e
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidTokenError(f"Malformed token payload: {e}") from e

        if expected_type is not None and claims.token_type != expected_type:
            msg = f"Expected {expected_type} token, got {claims.token_type}"
            raise InvalidTokenError(msg)

        return claims
