"""
JWT token creation and validation.

Handles:
- Access token issuance (subject + role, fixed TTL)
- Signature, algorithm and expiry validation
- Bearer token extraction from an Authorization header

Tokens are stateless and cannot be revoked before they expire.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Union

import jwt

from .types import Claims, ROLES

logger = logging.getLogger(__name__)

# HMAC algorithms only: the signing key is a shared secret
SUPPORTED_ALGORITHMS = frozenset({"HS256", "HS384", "HS512"})
MIN_SECRET_BYTES = 32
DEFAULT_TTL = timedelta(hours=24)


# =============================================================================
# Errors
# =============================================================================

class TokenError(Exception):
    """Base class for token validation failures. Message is safe to expose."""


class MalformedToken(TokenError):
    """Token could not be decoded or lacks required claims."""


class InvalidSignature(TokenError):
    """Signature mismatch, or the token names an algorithm we do not accept."""


class TokenExpired(TokenError):
    """Token is past its expiry time."""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# Token Service
# =============================================================================

class TokenService:
    """Issues and validates signed, expiring access tokens.

    Args:
        secret: Signing key (at least 32 bytes)
        algorithm: Pinned HMAC algorithm; validation accepts nothing else
        ttl: Lifetime of issued tokens
        clock: Returns the current aware UTC datetime; used for both issue
            and expiry checks (injectable for tests)
    """

    def __init__(
        self,
        secret: Union[str, bytes],
        algorithm: str = "HS256",
        ttl: timedelta = DEFAULT_TTL,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        key = secret.encode("utf-8") if isinstance(secret, str) else secret
        if len(key) < MIN_SECRET_BYTES:
            raise ValueError(f"Token signing secret must be at least {MIN_SECRET_BYTES} bytes")
        if algorithm not in SUPPORTED_ALGORITHMS:
            raise ValueError(f"Unsupported token algorithm: {algorithm}")
        if ttl <= timedelta(0):
            raise ValueError("Token TTL must be positive")

        self._secret = key
        self.algorithm = algorithm
        self.ttl = ttl
        self._clock = clock or _utcnow

    def __repr__(self) -> str:
        return f"TokenService(algorithm={self.algorithm!r}, ttl={self.ttl!r})"

    def issue(self, subject: str, role: str) -> str:
        """Create a signed access token.

        Args:
            subject: Username the token is issued to
            role: Role at issuance time

        Returns:
            Encoded JWT
        """
        if not subject:
            raise ValueError("Token subject must not be empty")
        if role not in ROLES:
            raise ValueError(f"Unknown role: {role!r}")

        now = self._clock()
        payload = {
            "sub": subject,
            "role": role,
            "iat": now,
            "exp": now + self.ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def validate(self, token: str) -> Claims:
        """Verify a token and return its claims.

        The signature is checked before any claim is read, and only the
        pinned algorithm is accepted. Expiry is judged by the service's
        clock, not wall-clock time.

        Raises:
            MalformedToken: Undecodable token or missing/invalid claims
            InvalidSignature: Bad signature or unexpected algorithm
            TokenExpired: Token is past its expiry
        """
        if not isinstance(token, str) or not token.strip():
            raise MalformedToken("Token is empty")

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={
                    "require": ["sub", "exp", "iat"],
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except jwt.InvalidAlgorithmError:
            raise InvalidSignature("Token algorithm not allowed") from None
        except jwt.InvalidSignatureError:
            raise InvalidSignature("Token signature is invalid") from None
        except jwt.InvalidTokenError as e:
            logger.debug(f"Rejected malformed token: {type(e).__name__}")
            raise MalformedToken("Token is malformed") from None

        exp, iat = payload["exp"], payload["iat"]
        for value in (exp, iat):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise MalformedToken("Token is malformed")

        if exp <= self._clock().timestamp():
            raise TokenExpired("Token expired")

        role = payload.get("role")
        if role not in ROLES:
            raise MalformedToken("Token carries an unknown role")

        return Claims(
            subject=payload["sub"],
            role=role,
            expires_at=datetime.fromtimestamp(exp, tz=timezone.utc),
            issued_at=datetime.fromtimestamp(iat, tz=timezone.utc),
        )


def get_bearer_token(auth_header: Optional[str]) -> Optional[str]:
    """Extract the token from an "Authorization: Bearer <token>" value.

    Returns:
        Token string or None if the header is absent or uses another scheme
    """
    if not auth_header:
        return None
    scheme, _, token = auth_header.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    token = token.strip()
    return token or None
