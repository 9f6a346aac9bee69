"""
Flask Application Factory.

Creates and configures the Flask app: settings, logging, database, auth
services, extensions, blueprints and middleware.
"""

import logging
import time
import uuid
from typing import Optional

from flask import Flask, g, request

from config.settings import AppSettings, get_settings
from core.db import Database
from core.errors import register_error_handlers

logger = logging.getLogger(__name__)

# Views that accept a password; these get the stricter auth rate limit
CREDENTIAL_ENDPOINTS = ("auth.login", "auth.register", "auth.change_password")


def create_app(settings: Optional[AppSettings] = None, config: Optional[dict] = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        settings: Validated settings; read from the environment when omitted.
            Raises ValueError here if the secrets are missing.
        config: Optional dict of Flask config overrides (e.g. {'TESTING': True}).

    Returns:
        Configured Flask app instance.
    """
    settings = settings or get_settings()

    app = Flask(__name__)
    if config:
        app.config.update(config)

    # Configure logging
    from tracker.logging_config import configure_logging
    configure_logging(settings.log_level, settings.log_format, settings.log_file, app=app)

    # Storage and services
    _init_services(app, settings)

    # Initialize extensions (CORS, limiter)
    from tracker.extensions import init_extensions
    limiter = init_extensions(app, settings)

    # Register custom error handlers for the APIError hierarchy
    register_error_handlers(app)

    # Register blueprints
    _register_blueprints(app, limiter, settings)

    # Register middleware
    _register_middleware(app)

    logger.info("Bug tracker API initialized")
    return app


def _init_services(app, settings: AppSettings):
    """Open the database, create tables and build the auth services."""
    from tracker.auth import build_auth_components
    from tracker.resources import ResourceStore
    from tracker.schema import initialize

    db = Database(settings.database.sqlite_path)
    initialize(db)

    auth = build_auth_components(settings.auth, db)

    app.extensions["db"] = db
    app.extensions["auth"] = auth
    app.extensions["resources"] = ResourceStore(db)

    # Optional first admin account
    admin = settings.auth
    if admin.admin_username and admin.admin_password:
        auth.service.ensure_admin(admin.admin_username, admin.admin_password.get_secret_value())


def _register_blueprints(app, limiter, settings: AppSettings):
    """Register all route blueprints."""
    from tracker.routes import health_bp, auth_bp, bugs_bp, developers_bp, projects_bp

    app.register_blueprint(health_bp)

    app.register_blueprint(auth_bp)

    # Brute-force rate limit on the credential endpoints only
    auth_limit = limiter.limit(settings.rate_limit.auth)
    for endpoint in CREDENTIAL_ENDPOINTS:
        app.view_functions[endpoint] = auth_limit(app.view_functions[endpoint])

    app.register_blueprint(bugs_bp)
    app.register_blueprint(developers_bp)
    app.register_blueprint(projects_bp)

    # Limiter exemptions for health
    limiter.exempt(health_bp)


def _register_middleware(app):
    """Register request tracking and security middleware."""

    @app.before_request
    def before_request_tracking():
        """Track request start and assign request ID."""
        g.request_id = request.headers.get('X-Request-ID', str(uuid.uuid4())[:8])
        g.start_time = time.time()

    @app.after_request
    def after_request_tracking(response):
        """Log request completion with timing and add security headers."""
        duration_ms = 0
        if hasattr(g, 'start_time'):
            duration_ms = (time.time() - g.start_time) * 1000

        if hasattr(g, 'request_id'):
            response.headers['X-Request-ID'] = g.request_id

        log_level = logging.WARNING if response.status_code >= 400 else logging.INFO
        if request.path == '/health':
            log_level = logging.DEBUG

        logger.log(
            log_level,
            f"{request.method} {request.path} -> {response.status_code} ({duration_ms:.1f}ms)",
            extra={
                'request_id': getattr(g, 'request_id', 'unknown'),
                'method': request.method,
                'endpoint': request.path,
                'status_code': response.status_code,
                'duration_ms': round(duration_ms, 2),
                'remote_addr': request.remote_addr,
                'user': getattr(g, 'current_user', None),
            }
        )

        # Security headers
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
        response.headers['Cache-Control'] = 'no-store'

        return response
