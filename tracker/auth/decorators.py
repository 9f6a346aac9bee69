"""
Flask route decorators for authentication and authorization.

Provides:
- jwt_required: Require valid JWT token
- role_required: Require specific roles
- admin_required: Require the admin role
- require_guards: Run guards inline from inside a view

The guard chain runs before the view body, so a rejected request never
reaches any side-effecting code.
"""
from functools import wraps

from flask import g, request

from core.errors import APIError, AuthenticationError, PermissionDeniedError
from .components import get_auth
from .guards import Guard, GateContext, Rejected, bearer_guard, role_guard, run_guards
from .types import Claims, ROLE_ADMIN

_REJECTIONS = {401: AuthenticationError, 403: PermissionDeniedError}


def require_guards(*extra_guards: Guard) -> Claims:
    """Authenticate the current request, then apply extra guards.

    Sets g.claims, g.current_user and g.current_role on success.

    Raises:
        AuthenticationError: Missing or invalid token (401)
        PermissionDeniedError: Role not allowed (403)
    """
    ctx = GateContext(
        authorization=request.headers.get("Authorization"),
        path=request.path,
    )
    outcome = run_guards([bearer_guard(get_auth().tokens), *extra_guards], ctx)
    if isinstance(outcome, Rejected):
        raise _REJECTIONS.get(outcome.status_code, APIError)(outcome.message, outcome.status_code)

    claims = outcome.context.claims
    g.claims = claims
    g.current_user = claims.subject
    g.current_role = claims.role
    return claims


def jwt_required(f):
    """Decorator to require valid JWT token for endpoint.

    Sets g.claims, g.current_user, g.current_role on success.
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        require_guards()
        return f(*args, **kwargs)
    return decorated


def role_required(*allowed_roles):
    """Decorator factory to require specific roles.

    Usage:
        @role_required("admin")
        def admin_only():
            ...

        @role_required("admin", "developer")
        def staff_only():
            ...
    """
    def decorator(f):
        @wraps(f)
        def decorated(*args, **kwargs):
            require_guards(role_guard(*allowed_roles))
            return f(*args, **kwargs)
        return decorated
    return decorator


admin_required = role_required(ROLE_ADMIN)
