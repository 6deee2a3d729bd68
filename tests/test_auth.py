from unittest.mock import MagicMock, patch

import pytest
import requests

from quizdesk.helpers.AuthProvider import AuthProvider, AuthenticationError
from quizdesk.helpers.Utilities import Utils
from quizdesk.services.Auth import INVALID_CREDENTIALS_ERROR, AuthService


def provider_response(status_code, body=None):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = body or {}
    return response


class TestAuthProvider:
    def test_successful_sign_in_returns_principal(self, monkeypatch):
        monkeypatch.setenv("AUTH_PROVIDER_API_KEY", "key-123")
        body = {"email": "admin@example.com", "localId": "uid-1", "idToken": "tok"}
        with patch("quizdesk.helpers.AuthProvider.requests.post", return_value=provider_response(200, body)) as post:
            principal = AuthProvider().sign_in("admin@example.com", "secret")

        assert principal == {"email": "admin@example.com", "localId": "uid-1", "idToken": "tok"}
        assert post.call_args.kwargs["params"] == {"key": "key-123"}
        assert post.call_args.kwargs["json"]["returnSecureToken"] is True

    def test_rejected_credentials(self):
        with patch("quizdesk.helpers.AuthProvider.requests.post", return_value=provider_response(400)):
            with pytest.raises(AuthenticationError, match="Invalid email or password"):
                AuthProvider().sign_in("admin@example.com", "wrong")

    def test_unreachable_provider_is_a_failed_sign_in(self):
        with patch("quizdesk.helpers.AuthProvider.requests.post", side_effect=requests.ConnectionError("down")):
            with pytest.raises(AuthenticationError):
                AuthProvider().sign_in("admin@example.com", "secret")


class TestAuthService:
    def test_admin_allow_list(self):
        assert AuthService.is_admin("admin@example.com")
        assert AuthService.is_admin("second-admin@example.com")
        assert not AuthService.is_admin("Admin@example.com")
        assert not AuthService.is_admin(None)

    def test_sign_in_issues_token(self):
        provider = MagicMock()
        provider.sign_in.return_value = {"email": "admin@example.com", "localId": "uid-1"}
        result = AuthService(provider).sign_in("admin@example.com", "secret")

        assert result["success"]
        assert result["data"]["isAdmin"] is True
        payload = Utils.decode_jwt_token(result["data"]["token"])
        assert payload["email"] == "admin@example.com"
        assert payload["uid"] == "uid-1"

    def test_failed_sign_in_is_generic(self):
        provider = MagicMock()
        provider.sign_in.side_effect = AuthenticationError("whatever the provider said")
        result = AuthService(provider).sign_in("admin@example.com", "wrong")
        assert result == {"success": False, "data": None, "error": INVALID_CREDENTIALS_ERROR}

    def test_sign_out_revokes_token(self):
        service = AuthService(MagicMock())
        token = Utils.create_jwt_token({"email": "admin@example.com"})
        payload = service.verify_token(token)
        service.sign_out(payload)
        with pytest.raises(ValueError, match="signed out"):
            service.verify_token(token)

    def test_tampered_token_is_rejected(self):
        token = Utils.create_jwt_token({"email": "admin@example.com"})
        with pytest.raises(ValueError):
            AuthService(MagicMock()).verify_token(token + "x")
