"""
User identity management: authentication and registration.

Handles:
- Credential verification (constant-shape: unknown user == wrong password)
- Registration with uniqueness mapped to ConflictError
- Login composition (authenticate, then issue a token)
- Password rotation and admin role assignment
- Bootstrap admin account from configuration
"""
import logging
from typing import Optional

from core.errors import AuthenticationError, ConflictError, NotFoundError, ValidationError
from .passwords import PasswordHasher
from .store import UserStore, UsernameTaken
from .tokens import TokenService
from .types import DEFAULT_ROLE, Identity, ROLES

logger = logging.getLogger(__name__)

MAX_USERNAME_LENGTH = 100
MAX_PASSWORD_LENGTH = 200

LOGIN_FAILED_MESSAGE = "Invalid username or password"


def _require_text(value, field: str, max_length: int) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} is required")
    if len(value) > max_length:
        raise ValidationError(f"{field} exceeds maximum length")
    return value


def _require_role(role) -> str:
    if role not in ROLES:
        raise ValidationError(f"Role must be one of: {', '.join(sorted(ROLES))}")
    return role


class AuthenticationService:
    """Turns credentials into identities, and identities into tokens."""

    def __init__(self, store: UserStore, hasher: PasswordHasher, tokens: TokenService):
        self.store = store
        self.hasher = hasher
        self.tokens = tokens
        # Verified against when the user does not exist, so both failure
        # paths pay for one slow hash
        self._dummy_digest = hasher.hash("dummy-password-for-timing")

    # =========================================================================
    # Authentication
    # =========================================================================

    def authenticate(self, username: str, password: str) -> Optional[Identity]:
        """Authenticate user with username and password.

        Returns:
            Identity on success; None for an unknown user, a wrong password,
            or empty input. Callers cannot tell these apart.
        """
        if not isinstance(username, str) or not isinstance(password, str):
            return None
        if not username or not password:
            return None

        identity = self.store.find_by_username(username)
        if identity is None:
            self.hasher.verify(password, self._dummy_digest)
            return None

        if not self.hasher.verify(password, identity.password_digest):
            return None
        return identity

    def login(self, username: str, password: str) -> str:
        """Authenticate and issue an access token.

        Raises:
            ValidationError: Empty username or password
            AuthenticationError: Bad credentials
        """
        _require_text(username, "Username", MAX_USERNAME_LENGTH)
        _require_text(password, "Password", MAX_PASSWORD_LENGTH)

        identity = self.authenticate(username, password)
        if identity is None:
            logger.info(f"Failed login attempt for '{username}'")
            raise AuthenticationError(LOGIN_FAILED_MESSAGE)

        logger.info(f"User '{username}' logged in")
        return self.tokens.issue(identity.username, identity.role)

    # =========================================================================
    # Registration
    # =========================================================================

    def register(self, username: str, password: str, role: str = DEFAULT_ROLE) -> Identity:
        """Create a new identity.

        Raises:
            ValidationError: Empty username/password or unknown role
            ConflictError: Username already taken
        """
        _require_text(username, "Username", MAX_USERNAME_LENGTH)
        _require_text(password, "Password", MAX_PASSWORD_LENGTH)
        _require_role(role)

        digest = self.hasher.hash(password)
        try:
            identity = self.store.insert(username, digest, role)
        except UsernameTaken:
            raise ConflictError("username taken") from None

        logger.info(f"Registered user '{username}' with role '{role}'")
        return identity

    # =========================================================================
    # Mutations
    # =========================================================================

    def change_password(self, username: str, old_password: str, new_password: str) -> None:
        """Rotate a user's password digest after checking the current password.

        Raises:
            ValidationError: Empty new password
            AuthenticationError: Current password is wrong
        """
        _require_text(new_password, "New password", MAX_PASSWORD_LENGTH)

        identity = self.authenticate(username, old_password)
        if identity is None:
            raise AuthenticationError("Current password is incorrect")

        self.store.update_password(identity.username, self.hasher.hash(new_password))
        logger.info(f"Password changed for user '{username}'")

    def set_role(self, username: str, role: str) -> None:
        """Assign a role (admin action).

        Raises:
            ValidationError: Unknown role
            NotFoundError: No such user
        """
        _require_role(role)
        if not self.store.update_role(username, role):
            raise NotFoundError(f"User '{username}' not found")
        logger.info(f"Role for user '{username}' set to '{role}'")

    def ensure_admin(self, username: str, password: str) -> bool:
        """Create the bootstrap admin if the username is free.

        Returns:
            True if the account was created
        """
        if self.store.find_by_username(username) is not None:
            return False
        try:
            self.register(username, password, role="admin")
        except ConflictError:
            # Another worker created it first
            return False
        logger.info(f"Bootstrap admin '{username}' created")
        return True
