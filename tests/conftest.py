"""Shared pytest fixtures for bug tracker tests."""
import os
import sys
from datetime import datetime, timedelta, timezone

import pytest

# Add project root to path
_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, _PROJECT_ROOT)

# ---------------------------------------------------------------------------
# Deterministic test environment, set BEFORE any tracker module imports.
# Settings refuse to load without both secrets. Hashing uses a cheap
# pbkdf2 work factor so the suite stays fast.
# ---------------------------------------------------------------------------
TEST_JWT_SECRET = 'test-jwt-secret-for-pytest-32chars!'
TEST_PEPPER = 'test-pepper-for-pytest'

os.environ.setdefault('JWT_SECRET', TEST_JWT_SECRET)
os.environ.setdefault('PASSWORD_PEPPER', TEST_PEPPER)
os.environ.setdefault('PASSWORD_HASH_METHOD', 'pbkdf2:sha256:1000')
os.environ.setdefault('RATE_LIMIT_ENABLED', 'false')
os.environ.setdefault('LOG_FORMAT', 'text')
os.environ.pop('ADMIN_USERNAME', None)
os.environ.pop('ADMIN_PASSWORD', None)


# =============================================================================
# Settings / Database Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def _reset_settings():
    """Reset the settings singleton between tests for isolation."""
    from config.settings import get_settings
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def database_url(tmp_path, monkeypatch):
    """Per-test SQLite file, exported as DATABASE_URL."""
    url = f"sqlite:///{tmp_path / 'bugtrack.db'}"
    monkeypatch.setenv('DATABASE_URL', url)
    return url


@pytest.fixture
def db(tmp_path):
    """Initialized database with all tables."""
    from core.db import Database
    from tracker.schema import initialize

    database = Database(tmp_path / 'bugtrack.db')
    initialize(database)
    return database


# =============================================================================
# Auth Service Fixtures
# =============================================================================

class FrozenClock:
    """Settable clock for token issuance."""

    def __init__(self, now=None):
        self.now = now or datetime.now(timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, delta: timedelta):
        self.now += delta


@pytest.fixture
def hasher():
    from tracker.auth import PasswordHasher
    return PasswordHasher(TEST_PEPPER.encode('utf-8'), method='pbkdf2:sha256:1000')


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def tokens(clock):
    from tracker.auth import TokenService
    return TokenService(TEST_JWT_SECRET, clock=clock)


@pytest.fixture
def auth_service(db, hasher, tokens):
    from tracker.auth import AuthenticationService, SQLUserStore
    return AuthenticationService(SQLUserStore(db), hasher, tokens)


# =============================================================================
# Flask App Fixtures
# =============================================================================

@pytest.fixture
def app(database_url):
    """Test app over a fresh database."""
    from tracker.app import create_app
    return create_app(config={'TESTING': True})


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    """Log in through the API and return the token."""
    def _login(username, password):
        resp = client.post('/login', json={'username': username, 'password': password})
        assert resp.status_code == 200, resp.get_json()
        return resp.get_json()['token']
    return _login


@pytest.fixture
def developer_token(app, login):
    """Token for a freshly registered developer."""
    app.extensions['auth'].service.register('dev', 'dev-password')
    return login('dev', 'dev-password')


@pytest.fixture
def admin_token(app, login):
    """Token for an admin created directly through the service."""
    app.extensions['auth'].service.register('root', 'root-password', role='admin')
    return login('root', 'root-password')
