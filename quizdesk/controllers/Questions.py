from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from quizdesk.dependencies import get_question_service
from quizdesk.helpers.Utilities import Utils
from quizdesk.middleware.JWTVerification import admin_validator
from quizdesk.schemas.Questions import QuestionCreate
from quizdesk.schemas.ServerResponse import ServerResponse
from quizdesk.services.Questions import QuestionService

router = APIRouter(prefix="/api/v1/questions", tags=["Questions"])


class ActiveFlag(BaseModel):
    isActive: bool


@router.get("/active", response_model=ServerResponse)
def get_active_question(service: QuestionService = Depends(get_question_service)):
    try:
        data = service.get_active_question()
        return Utils.create_response(data["data"], data["success"], data.get("error", ""))
    except Exception as e:
        raise HTTPException(status_code=400, detail={"data": None, "error": str(e), "success": False})


@router.post("", response_model=ServerResponse)
def create_question(
    body: QuestionCreate,
    service: QuestionService = Depends(get_question_service),
    jwt_payload: dict = Depends(admin_validator)
):
    try:
        data = service.create_question(body)
        return Utils.create_response(data["data"], data["success"], data.get("error", ""))
    except Exception as e:
        raise HTTPException(status_code=400, detail={"data": None, "error": str(e), "success": False})


@router.get("", response_model=ServerResponse)
def list_questions(
    page: int = 1,
    limit: int = 50,
    service: QuestionService = Depends(get_question_service),
    jwt_payload: dict = Depends(admin_validator)
):
    try:
        data = service.list_questions(page, limit)
        return Utils.create_response(data["data"], data["success"], data.get("error", ""))
    except Exception as e:
        raise HTTPException(status_code=400, detail={"data": None, "error": str(e), "success": False})


@router.patch("/{question_id}/active", response_model=ServerResponse)
def set_question_active(
    question_id: str,
    body: ActiveFlag,
    service: QuestionService = Depends(get_question_service),
    jwt_payload: dict = Depends(admin_validator)
):
    try:
        data = service.set_active(question_id, body.isActive)
        return Utils.create_response(data["data"], data["success"], data.get("error", ""))
    except Exception as e:
        raise HTTPException(status_code=400, detail={"data": None, "error": str(e), "success": False})
