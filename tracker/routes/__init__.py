"""
Route blueprints for the Bug Tracker API.
"""

from .health import health_bp
from .auth_routes import auth_bp
from .bugs import bugs_bp
from .developers import developers_bp
from .projects import projects_bp

__all__ = ['health_bp', 'auth_bp', 'bugs_bp', 'developers_bp', 'projects_bp']
