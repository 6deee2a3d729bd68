from fastapi import APIRouter, Depends, HTTPException

from quizdesk.dependencies import get_auth_service
from quizdesk.helpers.Utilities import Utils
from quizdesk.middleware.JWTVerification import jwt_validator
from quizdesk.schemas.Auth import LoginRequest
from quizdesk.schemas.ServerResponse import ServerResponse
from quizdesk.services.Auth import AuthService

router = APIRouter(prefix="/api/v1/auth", tags=["Auth"])


@router.post("/login", response_model=ServerResponse)
def login(body: LoginRequest, service: AuthService = Depends(get_auth_service)):
    data = service.sign_in(body.email, body.password)
    if not data["success"]:
        raise HTTPException(status_code=401, detail={"data": None, "error": data["error"], "success": False})
    return Utils.create_response(data["data"], data["success"], data.get("error", ""))


@router.post("/logout", response_model=ServerResponse)
def logout(service: AuthService = Depends(get_auth_service), jwt_payload: dict = Depends(jwt_validator)):
    try:
        data = service.sign_out(jwt_payload)
        return Utils.create_response(data["data"], data["success"], data.get("error", ""))
    except Exception as e:
        raise HTTPException(status_code=400, detail={"data": None, "error": str(e), "success": False})


@router.get("/me", response_model=ServerResponse)
def get_me(service: AuthService = Depends(get_auth_service), jwt_payload: dict = Depends(jwt_validator)):
    try:
        data = service.current_principal(jwt_payload)
        return Utils.create_response(data["data"], data["success"], data.get("error", ""))
    except Exception as e:
        raise HTTPException(status_code=400, detail={"data": None, "error": str(e), "success": False})
