from fastapi import APIRouter, Depends, HTTPException

from quizdesk.dependencies import get_intake_service
from quizdesk.helpers.Utilities import Utils
from quizdesk.schemas.Answers import IntakeSubmission
from quizdesk.schemas.ServerResponse import ServerResponse
from quizdesk.services.Intake import IntakeService

router = APIRouter(prefix="/api/v1/intake", tags=["Intake"])


@router.get("/autofill", response_model=ServerResponse)
def autofill(phoneNumber: str = "", service: IntakeService = Depends(get_intake_service)):
    try:
        data = service.autofill(phoneNumber)
        return Utils.create_response(data["data"], data["success"], data.get("error", ""))
    except Exception as e:
        raise HTTPException(status_code=400, detail={"data": None, "error": str(e), "success": False})


@router.get("/lookup", response_model=ServerResponse)
def lookup(phoneNumber: str = "", service: IntakeService = Depends(get_intake_service)):
    try:
        data = service.lookup(phoneNumber)
        return Utils.create_response(data["data"], data["success"], data.get("error", ""))
    except Exception as e:
        raise HTTPException(status_code=400, detail={"data": None, "error": str(e), "success": False})


@router.post("/submit", response_model=ServerResponse)
def submit(body: IntakeSubmission, service: IntakeService = Depends(get_intake_service)):
    try:
        data = service.submit(body)
        return Utils.create_response(data["data"], data["success"], data.get("error", ""))
    except Exception as e:
        raise HTTPException(status_code=400, detail={"data": None, "error": str(e), "success": False})
