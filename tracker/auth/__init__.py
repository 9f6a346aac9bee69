"""
Bug tracker authentication module.

Public API:
- Decorators: jwt_required, role_required, admin_required
- Guards: bearer_guard, role_guard, run_guards
- Services: PasswordHasher, TokenService, AuthenticationService
- Wiring: build_auth_components, get_auth

Import Rules:
- External callers: Use `from tracker.auth import X` (this facade)
- Internal auth modules: Use `from .submodule import X` (direct imports)
"""

# =============================================================================
# Decorators (most commonly used)
# =============================================================================
from .decorators import (
    jwt_required,
    role_required,
    admin_required,
    require_guards,
)

# =============================================================================
# Guards
# =============================================================================
from .guards import (
    Admitted,
    GateContext,
    Rejected,
    bearer_guard,
    role_guard,
    run_guards,
)

# =============================================================================
# Services
# =============================================================================
from .passwords import PasswordHasher
from .tokens import (
    TokenService,
    TokenError,
    MalformedToken,
    InvalidSignature,
    TokenExpired,
    get_bearer_token,
)
from .identity import AuthenticationService
from .store import SQLUserStore, UserStore, UsernameTaken
from .components import AuthComponents, build_auth_components, get_auth

# =============================================================================
# Types
# =============================================================================
from .types import Claims, Identity, ROLES, ROLE_ADMIN, ROLE_DEVELOPER, DEFAULT_ROLE

__all__ = [
    # Decorators
    "jwt_required",
    "role_required",
    "admin_required",
    "require_guards",

    # Guards
    "Admitted",
    "GateContext",
    "Rejected",
    "bearer_guard",
    "role_guard",
    "run_guards",

    # Services
    "PasswordHasher",
    "TokenService",
    "TokenError",
    "MalformedToken",
    "InvalidSignature",
    "TokenExpired",
    "get_bearer_token",
    "AuthenticationService",
    "SQLUserStore",
    "UserStore",
    "UsernameTaken",
    "AuthComponents",
    "build_auth_components",
    "get_auth",

    # Types
    "Claims",
    "Identity",
    "ROLES",
    "ROLE_ADMIN",
    "ROLE_DEVELOPER",
    "DEFAULT_ROLE",
]
