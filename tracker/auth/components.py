"""
Construction of the auth services from settings.

Built once by the app factory and stored on app.extensions["auth"]; views
and decorators look them up per request instead of importing globals.
"""
from dataclasses import dataclass
from datetime import timedelta

from flask import current_app

from config.settings import AuthSettings
from core.db import Database
from .identity import AuthenticationService
from .passwords import PasswordHasher
from .store import SQLUserStore, UserStore
from .tokens import TokenService

EXTENSION_KEY = "auth"


@dataclass(frozen=True)
class AuthComponents:
    hasher: PasswordHasher
    tokens: TokenService
    store: UserStore
    service: AuthenticationService


def build_auth_components(settings: AuthSettings, db: Database) -> AuthComponents:
    """Wire hasher, token service and store from validated settings."""
    hasher = PasswordHasher(
        settings.password_pepper.get_secret_value().encode("utf-8"),
        method=settings.password_hash_method,
    )
    tokens = TokenService(
        settings.jwt_secret.get_secret_value(),
        algorithm=settings.jwt_algorithm,
        ttl=timedelta(hours=settings.jwt_expiration_hours),
    )
    store = SQLUserStore(db)
    service = AuthenticationService(store, hasher, tokens)
    return AuthComponents(hasher=hasher, tokens=tokens, store=store, service=service)


def get_auth() -> AuthComponents:
    """Auth services of the current Flask app."""
    return current_app.extensions[EXTENSION_KEY]
