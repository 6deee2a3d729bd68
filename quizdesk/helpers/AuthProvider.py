import logging

import requests

from quizdesk.helpers.Config import get_auth_provider_api_key, get_auth_provider_url

logger = logging.getLogger(__name__)


class AuthenticationError(Exception):
    pass


class AuthProvider:
    """
    Client for the hosted email/password identity service. Credentials are
    never checked locally; the provider either returns a principal or refuses.
    """

    def __init__(self, timeout: float = 10):
        self.timeout = timeout

    def sign_in(self, email: str, password: str) -> dict:
        try:
            response = requests.post(
                get_auth_provider_url(),
                params={"key": get_auth_provider_api_key()},
                json={"email": email, "password": password, "returnSecureToken": True},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("Identity provider unreachable: %s", e)
            raise AuthenticationError("Invalid email or password") from e

        if response.status_code != 200:
            logger.info("Sign-in refused for %s (status %s)", email, response.status_code)
            raise AuthenticationError("Invalid email or password")

        body = response.json()
        return {
            "email": body.get("email", email),
            "localId": body.get("localId"),
            "idToken": body.get("idToken"),
        }
