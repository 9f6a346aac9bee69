"""
Health check endpoint for the Bug Tracker API.
"""

import logging

from flask import Blueprint, current_app, jsonify

from tracker import __version__
from tracker.schema import missing_tables

logger = logging.getLogger(__name__)

health_bp = Blueprint('health', __name__)


@health_bp.route('/health', methods=['GET'])
def health_check():
    """Liveness plus a database round trip and schema check."""
    db = current_app.extensions["db"]

    missing = []
    db_ok = db.ping()
    if db_ok:
        missing = missing_tables(db)
    else:
        logger.warning("Health check: database unavailable")
    if missing:
        logger.warning(f"Health check: missing tables {', '.join(missing)}")

    healthy = db_ok and not missing
    return jsonify({
        "status": "healthy" if healthy else "degraded",
        "service": "Bug Tracker API",
        "version": __version__,
        "database": "connected" if db_ok else "unavailable",
        "schema": "ready" if healthy else ("incomplete" if db_ok else "unknown"),
    }), 200 if healthy else 503
