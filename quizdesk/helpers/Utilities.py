from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import uuid4

import jwt
from bson import ObjectId

from quizdesk.helpers.Config import get_jwt_algorithm, get_jwt_expiry_minutes, get_jwt_secret
from quizdesk.schemas.ServerResponse import ServerResponse


class Utils:
    @staticmethod
    def serialize(value: Any) -> Any:
        """
        Make Mongo documents JSON friendly: ObjectIds become strings, nested
        lists and dicts are walked.
        """
        if isinstance(value, ObjectId):
            return str(value)
        if isinstance(value, dict):
            return {("id" if key == "_id" else key): Utils.serialize(item) for key, item in value.items()}
        if isinstance(value, (list, tuple)):
            return [Utils.serialize(item) for item in value]
        return value

    @staticmethod
    def create_response(data: Any, success: bool, error: str = "") -> ServerResponse:
        return ServerResponse(data=Utils.serialize(data), success=success, error=error or "")

    @staticmethod
    def generate_hex_string() -> str:
        return uuid4().hex

    @staticmethod
    def create_jwt_token(payload: dict) -> str:
        now = datetime.now(timezone.utc)
        claims = dict(payload)
        claims.setdefault("jti", Utils.generate_hex_string())
        claims["iat"] = now
        claims["exp"] = now + timedelta(minutes=get_jwt_expiry_minutes())
        return jwt.encode(claims, get_jwt_secret(), algorithm=get_jwt_algorithm())

    @staticmethod
    def decode_jwt_token(token: str) -> dict:
        """Raises jwt.PyJWTError on a bad signature or an expired token."""
        return jwt.decode(token, get_jwt_secret(), algorithms=[get_jwt_algorithm()])
