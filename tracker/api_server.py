"""
Bug Tracker API Server.

Entry point that creates the Flask app via the application factory.
Settings are read from the environment (and a local .env file); the
process refuses to start when JWT_SECRET or PASSWORD_PEPPER is missing.
"""

import logging

from dotenv import load_dotenv

load_dotenv()

from tracker.app import create_app  # noqa: E402
from config.settings import get_settings  # noqa: E402

logger = logging.getLogger(__name__)

# Create the application
app = create_app()


if __name__ == '__main__':
    settings = get_settings()
    logger.info(f"Starting Bug Tracker API on {settings.host}:{settings.port}")
    app.run(host=settings.host, port=settings.port)
