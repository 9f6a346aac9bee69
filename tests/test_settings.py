"""Tests for central configuration settings."""

import os
from unittest.mock import patch

import pytest

from config.settings import (
    AppSettings,
    AuthSettings,
    DatabaseSettings,
    RateLimitSettings,
    get_settings,
)

VALID_SECRET = 'a-signing-secret-that-is-long-enough!'


def _env_without(*keys):
    env = os.environ.copy()
    for key in keys:
        env.pop(key, None)
    return env


class TestAuthSettings:
    def test_defaults_applied(self):
        with patch.dict(os.environ, _env_without('JWT_ALGORITHM', 'JWT_EXPIRATION_HOURS',
                                                 'PASSWORD_HASH_METHOD'), clear=True):
            settings = AuthSettings()
            assert settings.jwt_algorithm == 'HS256'
            assert settings.jwt_expiration_hours == 24
            assert settings.password_hash_method == 'scrypt'
            assert settings.admin_username is None

    def test_env_override(self):
        with patch.dict(os.environ, {'JWT_EXPIRATION_HOURS': '48'}, clear=False):
            assert AuthSettings().jwt_expiration_hours == 48


class TestRequiredSecrets:
    def test_missing_jwt_secret_raises(self):
        with patch.dict(os.environ, _env_without('JWT_SECRET'), clear=True):
            with pytest.raises(ValueError, match='JWT_SECRET'):
                AppSettings()

    def test_missing_pepper_raises(self):
        with patch.dict(os.environ, _env_without('PASSWORD_PEPPER'), clear=True):
            with pytest.raises(ValueError, match='PASSWORD_PEPPER'):
                AppSettings()

    def test_blank_secret_raises(self):
        with patch.dict(os.environ, {'JWT_SECRET': '   '}, clear=False):
            with pytest.raises(ValueError, match='JWT_SECRET'):
                AppSettings()

    def test_short_secret_raises(self):
        with patch.dict(os.environ, {'JWT_SECRET': 'short'}, clear=False):
            with pytest.raises(ValueError, match='32 bytes'):
                AppSettings()

    def test_secret_and_pepper_must_differ(self):
        with patch.dict(os.environ, {'JWT_SECRET': VALID_SECRET, 'PASSWORD_PEPPER': VALID_SECRET},
                        clear=False):
            with pytest.raises(ValueError, match='different'):
                AppSettings()

    def test_non_positive_expiry_raises(self):
        with patch.dict(os.environ, {'JWT_EXPIRATION_HOURS': '0'}, clear=False):
            with pytest.raises(ValueError, match='JWT_EXPIRATION_HOURS'):
                AppSettings()

    def test_get_settings_fails_without_secret(self):
        with patch.dict(os.environ, _env_without('JWT_SECRET'), clear=True):
            get_settings.cache_clear()
            with pytest.raises(ValueError):
                get_settings()


class TestSecretStr:
    def test_secret_not_in_repr(self):
        with patch.dict(os.environ, {'JWT_SECRET': VALID_SECRET}, clear=False):
            settings = AppSettings()
            assert VALID_SECRET not in repr(settings)
            assert '**' in repr(settings.auth)

    def test_secret_value_accessible(self):
        with patch.dict(os.environ, {'JWT_SECRET': VALID_SECRET}, clear=False):
            assert AppSettings().auth.jwt_secret.get_secret_value() == VALID_SECRET


class TestDatabaseSettings:
    def test_sqlite_path(self):
        settings = DatabaseSettings(database_url='sqlite:///var/lib/bugtrack.db')
        assert str(settings.sqlite_path) == 'var/lib/bugtrack.db'

    def test_absolute_sqlite_path(self):
        settings = DatabaseSettings(database_url='sqlite:////tmp/bugtrack.db')
        assert str(settings.sqlite_path) == '/tmp/bugtrack.db'

    def test_unsupported_scheme(self):
        settings = DatabaseSettings(database_url='postgresql://localhost/bugtrack')
        with pytest.raises(ValueError, match='DATABASE_URL'):
            settings.sqlite_path


class TestRateLimitSettings:
    def test_prefixed_env(self):
        with patch.dict(os.environ, {'RATE_LIMIT_AUTH': '3 per minute',
                                     'RATE_LIMIT_ENABLED': 'true'}, clear=False):
            settings = RateLimitSettings()
            assert settings.auth == '3 per minute'
            assert settings.enabled is True


class TestRootSettings:
    def test_nested_groups_created(self):
        settings = AppSettings()
        assert isinstance(settings.auth, AuthSettings)
        assert isinstance(settings.database, DatabaseSettings)
        assert isinstance(settings.rate_limit, RateLimitSettings)

    def test_cors_origin_list(self):
        with patch.dict(os.environ, {'CORS_ORIGINS': 'http://a.test, http://b.test,'}, clear=False):
            assert AppSettings().cors_origin_list == ['http://a.test', 'http://b.test']

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
