"""
Password hashing and verification.

Handles:
- Password hashing (scrypt via werkzeug, salted per call)
- Password verification
- Peppering with a server-held secret before hashing
"""
import hashlib
import hmac

from werkzeug.security import generate_password_hash, check_password_hash

from core.errors import ValidationError

__all__ = ["PasswordHasher"]


class PasswordHasher:
    """Slow, salted, peppered password digests.

    The pepper is mixed in with HMAC-SHA256 so the value handed to the slow
    hash has a fixed length regardless of the password's.

    Args:
        pepper: Server-held secret, distinct from the token signing key
        method: werkzeug hash method string ("scrypt", "pbkdf2:sha256:600000")
    """

    def __init__(self, pepper: bytes, method: str = "scrypt"):
        if not pepper:
            raise ValueError("PasswordHasher requires a non-empty pepper")
        self._pepper = pepper
        self.method = method

    def __repr__(self) -> str:
        return f"PasswordHasher(method={self.method!r})"

    def _peppered(self, password: str) -> str:
        return hmac.new(self._pepper, password.encode("utf-8"), hashlib.sha256).hexdigest()

    def hash(self, password: str) -> str:
        """Hash a password.

        Args:
            password: Plain text password

        Returns:
            Self-describing digest ("method$salt$hash")

        Raises:
            ValidationError: If the password is empty
        """
        if not isinstance(password, str) or not password:
            raise ValidationError("Password must not be empty")
        return generate_password_hash(self._peppered(password), method=self.method)

    def verify(self, password: str, digest: str) -> bool:
        """Verify a password against its digest.

        Args:
            password: Plain text password
            digest: Digest produced by hash()

        Returns:
            True if password matches, False otherwise (including a malformed digest)
        """
        if not isinstance(password, str) or not password:
            return False
        if not isinstance(digest, str) or not digest:
            return False
        try:
            return check_password_hash(digest, self._peppered(password))
        except (ValueError, TypeError):
            return False
