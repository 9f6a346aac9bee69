"""Tests for the error hierarchy and Flask error handlers."""

import pytest
from flask import Flask
from werkzeug.exceptions import NotFound

from core.errors import (
    APIError,
    AuthenticationError,
    ConflictError,
    InternalError,
    NotFoundError,
    PermissionDeniedError,
    StoreUnavailable,
    Unauthorized,
    ValidationError,
    register_error_handlers,
)


@pytest.fixture
def error_app():
    app = Flask(__name__)
    register_error_handlers(app)

    @app.route('/raise/<kind>')
    def raise_error(kind):
        errors = {
            'validation': ValidationError('title: Field required'),
            'unauthorized': Unauthorized('missing or malformed credential'),
            'conflict': ConflictError('username taken'),
            'unavailable': StoreUnavailable('Storage temporarily unavailable'),
            'internal': InternalError('db password is hunter2'),
            'raw': KeyError('secret_column'),
            'forbidden': PermissionDeniedError('Access denied. Required roles: admin'),
            'http': NotFound(),
        }
        raise errors[kind]

    return app


class TestStatusCodes:
    @pytest.mark.parametrize('cls, status', [
        (ValidationError, 400),
        (AuthenticationError, 401),
        (PermissionDeniedError, 403),
        (NotFoundError, 404),
        (ConflictError, 409),
        (StoreUnavailable, 503),
    ])
    def test_class_status(self, cls, status):
        assert cls('x').status_code == status

    def test_unauthorized_alias(self):
        assert Unauthorized is AuthenticationError

    def test_explicit_status_override(self):
        assert APIError('x', 418).status_code == 418

    def test_internal_error_is_not_api_error(self):
        assert not issubclass(InternalError, APIError)


class TestHandlers:
    @pytest.mark.parametrize('kind, status, message', [
        ('validation', 400, 'title: Field required'),
        ('unauthorized', 401, 'missing or malformed credential'),
        ('forbidden', 403, 'Access denied. Required roles: admin'),
        ('conflict', 409, 'username taken'),
        ('unavailable', 503, 'Storage temporarily unavailable'),
    ])
    def test_expected_errors(self, error_app, kind, status, message):
        resp = error_app.test_client().get(f'/raise/{kind}')
        assert resp.status_code == status
        body = resp.get_json()
        assert body['status'] == 'failure'
        assert body['message'] == message
        assert body['error_id']

    def test_401_advertises_bearer(self, error_app):
        resp = error_app.test_client().get('/raise/unauthorized')
        assert resp.headers['WWW-Authenticate'] == 'Bearer'

    @pytest.mark.parametrize('kind', ['internal', 'raw'])
    def test_unexpected_errors_hide_details(self, error_app, kind):
        resp = error_app.test_client().get(f'/raise/{kind}')
        assert resp.status_code == 500
        body = resp.get_json()
        assert body['message'] == 'Internal server error'
        assert 'hunter2' not in resp.get_data(as_text=True)
        assert 'secret_column' not in resp.get_data(as_text=True)

    def test_http_exception_keeps_status(self, error_app):
        resp = error_app.test_client().get('/raise/http')
        assert resp.status_code == 404
        assert resp.get_json()['status'] == 'failure'

    def test_unknown_route_is_json(self, error_app):
        resp = error_app.test_client().get('/no/such/route')
        assert resp.status_code == 404
        assert resp.get_json()['status'] == 'failure'
