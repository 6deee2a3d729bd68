from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from quizdesk.dependencies import get_auth_service
from quizdesk.services.Auth import AuthService

bearer_scheme = HTTPBearer(auto_error=False)


def jwt_validator(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    auth_service: AuthService = Depends(get_auth_service),
) -> dict:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(status_code=401, detail={"data": None, "error": "Missing bearer token", "success": False})
    try:
        return auth_service.verify_token(credentials.credentials)
    except ValueError as e:
        raise HTTPException(status_code=401, detail={"data": None, "error": str(e), "success": False})


def admin_validator(jwt_payload: dict = Depends(jwt_validator)) -> dict:
    """Only principals on the configured administrator allow-list get through."""
    if not AuthService.is_admin(jwt_payload.get("email")):
        raise HTTPException(status_code=403, detail={"data": None, "error": "Not authorised", "success": False})
    return jwt_payload
