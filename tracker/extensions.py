"""
Flask extension setup.

init_extensions(app, settings) attaches CORS and the rate limiter. The
limiter is created per app so test apps never share counters.
"""

import logging

from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from config.settings import AppSettings

logger = logging.getLogger(__name__)


def init_extensions(app, settings: AppSettings) -> Limiter:
    """Initialize all Flask extensions with the app instance.

    Args:
        app: Flask application instance
        settings: Validated application settings

    Returns:
        The app's Limiter, for per-blueprint limits
    """
    CORS(app, origins=settings.cors_origin_list)

    rate_limit = settings.rate_limit
    limiter = Limiter(
        get_remote_address,
        app=app,
        default_limits=[rate_limit.default],
        storage_uri=rate_limit.storage,
        strategy="moving-window",
        enabled=rate_limit.enabled,
    )
    if not rate_limit.enabled:
        logger.info("Rate limiting disabled")

    return limiter
