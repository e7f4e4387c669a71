"""
Unit tests for the Auth Gateway.

Covers each request state: no token, bad token, vanished user, success.
"""

import time
from unittest.mock import MagicMock

import pytest

from taskdesk.auth import AuthGateway, Identity
from taskdesk.errors import (
    AuthenticationError,
    MissingCredentialsError,
    InvalidTokenError,
    UnknownUserError,
)


@pytest.fixture
def gateway(jwt_handler, user_store) -> AuthGateway:
    return AuthGateway(jwt_handler, user_store)


@pytest.fixture
def sample_token(jwt_handler, sample_user) -> str:
    return jwt_handler.create_access_token(user_id=sample_user.user_id)


class TestAuthenticate:

    @pytest.mark.unit
    def test_valid_token_yields_identity(self, gateway, sample_token, sample_user):
        identity = gateway.authenticate(sample_token)

        assert identity == Identity(
            user_id=sample_user.user_id,
            name=sample_user.name,
            email=sample_user.email
        )

    @pytest.mark.unit
    def test_identity_is_immutable(self, gateway, sample_token):
        identity = gateway.authenticate(sample_token)

        with pytest.raises(AttributeError):
            identity.user_id = "someone-else"

    @pytest.mark.unit
    @pytest.mark.parametrize("token", [None, "", "   "])
    def test_missing_token(self, token):
        """No bearer token short-circuits before verification."""
        jwt = MagicMock()
        users = MagicMock()
        gateway = AuthGateway(jwt, users)

        with pytest.raises(MissingCredentialsError) as exc_info:
            gateway.authenticate(token)

        assert exc_info.value.status_code == 401
        assert exc_info.value.message == "Not authorized, no token"
        jwt.verify_token.assert_not_called()
        users.get_by_id.assert_not_called()

    @pytest.mark.unit
    def test_invalid_token(self, gateway):
        with pytest.raises(InvalidTokenError) as exc_info:
            gateway.authenticate("not.a.token")

        assert exc_info.value.status_code == 403

    @pytest.mark.unit
    def test_expired_and_tampered_tokens_look_the_same(self, gateway, jwt_handler, sample_user, sample_token):
        """Expired and tampered tokens produce identical rejections."""
        expired = jwt_handler.create_access_token(
            user_id=sample_user.user_id,
            issued_at=int(time.time()) - 31 * 86400
        )
        tampered = sample_token[:-4] + "abcd"

        errors = []
        for token in (expired, tampered):
            with pytest.raises(InvalidTokenError) as exc_info:
                gateway.authenticate(token)
            errors.append((type(exc_info.value), exc_info.value.status_code, exc_info.value.message))

        assert errors[0] == errors[1]

    @pytest.mark.unit
    def test_valid_token_for_deleted_user(self, gateway, user_store, sample_user, sample_token):
        """Token validity does not imply the identity still exists."""
        user_store.delete_user(sample_user.user_id)

        with pytest.raises(UnknownUserError) as exc_info:
            gateway.authenticate(sample_token)

        assert exc_info.value.status_code == 401
        assert exc_info.value.message == "User not found"

    @pytest.mark.unit
    def test_all_rejections_are_authentication_errors(self):
        for error in (MissingCredentialsError, InvalidTokenError, UnknownUserError):
            assert issubclass(error, AuthenticationError)
