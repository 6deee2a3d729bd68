import logging
import threading
from typing import Optional

import jwt

from quizdesk.helpers.AuthProvider import AuthProvider, AuthenticationError
from quizdesk.helpers.Config import get_admin_emails
from quizdesk.helpers.Utilities import Utils

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_ERROR = "Invalid email or password"


class AuthService:
    """
    Issues short-lived admin session tokens once the identity provider has
    accepted the credentials. Sessions live only in this process.
    """

    def __init__(self, provider: Optional[AuthProvider] = None):
        self.provider = provider or AuthProvider()
        self._revoked = set()
        self._lock = threading.Lock()

    @staticmethod
    def is_admin(email: Optional[str]) -> bool:
        return bool(email) and email in get_admin_emails()

    def sign_in(self, email: str, password: str) -> dict:
        try:
            principal = self.provider.sign_in(email, password)
        except AuthenticationError:
            return {"success": False, "data": None, "error": INVALID_CREDENTIALS_ERROR}

        token = Utils.create_jwt_token({"email": principal["email"], "uid": principal.get("localId")})
        logger.info("Signed in %s", principal["email"])
        return {
            "success": True,
            "data": {
                "token": token,
                "email": principal["email"],
                "isAdmin": self.is_admin(principal["email"]),
            }
        }

    def sign_out(self, payload: dict) -> dict:
        jti = payload.get("jti")
        if jti:
            with self._lock:
                self._revoked.add(jti)
        logger.info("Signed out %s", payload.get("email"))
        return {"success": True, "data": "Signed out"}

    def verify_token(self, token: str) -> dict:
        """
        Decoded payload of a live token. Raises ValueError for anything that
        is not one.
        """
        try:
            payload = Utils.decode_jwt_token(token)
        except jwt.PyJWTError as e:
            raise ValueError("Invalid or expired token") from e
        with self._lock:
            if payload.get("jti") in self._revoked:
                raise ValueError("Session has been signed out")
        return payload

    def current_principal(self, payload: dict) -> dict:
        return {
            "success": True,
            "data": {
                "email": payload.get("email"),
                "uid": payload.get("uid"),
                "isAdmin": self.is_admin(payload.get("email")),
            }
        }
