from fastapi import APIRouter, Depends, HTTPException

from quizdesk.dependencies import get_quiz_flow_service
from quizdesk.helpers.Utilities import Utils
from quizdesk.schemas.QuizSession import SelectRequest, StartRequest
from quizdesk.schemas.ServerResponse import ServerResponse
from quizdesk.services.QuizFlow import QuizFlowService

router = APIRouter(prefix="/api/v1/quiz-flow", tags=["QuizFlow"])


@router.post("/session", response_model=ServerResponse)
def create_session(service: QuizFlowService = Depends(get_quiz_flow_service)):
    try:
        data = service.create_session()
        return Utils.create_response(data["data"], data["success"], data.get("error", ""))
    except Exception as e:
        raise HTTPException(status_code=400, detail={"data": None, "error": str(e), "success": False})


@router.get("/session/{session_id}", response_model=ServerResponse)
def get_session(session_id: str, service: QuizFlowService = Depends(get_quiz_flow_service)):
    try:
        data = service.get_session(session_id)
        return Utils.create_response(data["data"], data["success"], data.get("error", ""))
    except Exception as e:
        raise HTTPException(status_code=400, detail={"data": None, "error": str(e), "success": False})


@router.post("/session/{session_id}/start", response_model=ServerResponse)
def start_quiz(session_id: str, body: StartRequest, service: QuizFlowService = Depends(get_quiz_flow_service)):
    try:
        data = service.start(session_id, body)
        return Utils.create_response(data["data"], data["success"], data.get("error", ""))
    except Exception as e:
        raise HTTPException(status_code=400, detail={"data": None, "error": str(e), "success": False})


@router.post("/session/{session_id}/select", response_model=ServerResponse)
def select_option(session_id: str, body: SelectRequest, service: QuizFlowService = Depends(get_quiz_flow_service)):
    try:
        data = service.select(session_id, body.option)
        return Utils.create_response(data["data"], data["success"], data.get("error", ""))
    except Exception as e:
        raise HTTPException(status_code=400, detail={"data": None, "error": str(e), "success": False})


@router.post("/session/{session_id}/{action}", response_model=ServerResponse)
def navigate(session_id: str, action: str, service: QuizFlowService = Depends(get_quiz_flow_service)):
    handlers = {
        "save": service.save,
        "skip": service.skip,
        "next": service.next,
        "prev": service.prev,
        "complete": service.complete,
    }
    handler = handlers.get(action)
    if handler is None:
        raise HTTPException(status_code=404, detail={"data": None, "error": f"Unknown action: {action}", "success": False})
    try:
        data = handler(session_id)
        return Utils.create_response(data["data"], data["success"], data.get("error", ""))
    except Exception as e:
        raise HTTPException(status_code=400, detail={"data": None, "error": str(e), "success": False})
