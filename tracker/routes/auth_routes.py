"""
Authentication endpoints for the Bug Tracker API.

Provides login, registration, token introspection, password change and
admin role assignment.
"""

import logging

from flask import Blueprint, g, jsonify

from tracker.auth import (
    get_auth,
    jwt_required,
    admin_required,
    require_guards,
    role_guard,
    ROLE_ADMIN,
)
from tracker.schemas import (
    parse_body,
    LoginRequest,
    RegisterRequest,
    ChangePasswordRequest,
    AssignRoleRequest,
)

logger = logging.getLogger(__name__)

# Create blueprint
auth_bp = Blueprint('auth', __name__)


# =============================================================================
# Login / Registration
# =============================================================================

@auth_bp.route('/login', methods=['POST'])
def login():
    """
    Authenticate user and return JWT token.
    Rate limited (applied at registration).
    """
    body = parse_body(LoginRequest)
    token = get_auth().service.login(body.username, body.password)

    return jsonify({
        "status": "success",
        "token": token,
        "message": "Login successful",
    })


@auth_bp.route('/register', methods=['POST'])
def register():
    """
    Create a user account.

    Anyone may register a developer; registering an admin requires an
    admin token. The guard runs before the account is written.
    """
    body = parse_body(RegisterRequest)

    if body.role == ROLE_ADMIN:
        require_guards(role_guard(ROLE_ADMIN))

    identity = get_auth().service.register(body.username, body.password, body.role)

    return jsonify({
        "status": "success",
        "message": "User registered",
        "username": identity.username,
        "role": identity.role,
    })


# =============================================================================
# Token Introspection
# =============================================================================

@auth_bp.route('/protected', methods=['GET'])
@jwt_required
def protected():
    """Any valid token is accepted."""
    return jsonify({
        "status": "success",
        "message": "Access granted!",
        **g.claims.to_dict(),
    })


@auth_bp.route('/me', methods=['GET'])
@jwt_required
def get_current_user():
    """Get current authenticated user info."""
    return jsonify({
        "status": "success",
        "username": g.current_user,
        "role": g.current_role,
        "expires": int(g.claims.expires_at.timestamp()),
    })


# =============================================================================
# Account Management
# =============================================================================

@auth_bp.route('/change-password', methods=['POST'])
@jwt_required
def change_password():
    """Rotate the caller's password."""
    body = parse_body(ChangePasswordRequest)
    get_auth().service.change_password(g.current_user, body.old_password, body.new_password)

    return jsonify({"status": "success", "message": "Password changed"})


@auth_bp.route('/users/<username>/role', methods=['PUT'])
@admin_required
def assign_role(username):
    """Assign a role to a user (admin only)."""
    body = parse_body(AssignRoleRequest)
    get_auth().service.set_role(username, body.role)

    logger.info(f"Role of '{username}' set to '{body.role}' by '{g.current_user}'")
    return jsonify({
        "status": "success",
        "message": "Role updated",
        "username": username,
        "role": body.role,
    })
