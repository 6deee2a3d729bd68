from fastapi import APIRouter, Depends, HTTPException

from quizdesk.dependencies import get_leaderboard_service
from quizdesk.helpers.Utilities import Utils
from quizdesk.schemas.ServerResponse import ServerResponse
from quizdesk.services.Leaderboard import LeaderboardService

router = APIRouter(prefix="/api/v1/leaderboard", tags=["Leaderboard"])


@router.get("", response_model=ServerResponse)
def get_leaderboard(service: LeaderboardService = Depends(get_leaderboard_service)):
    try:
        data = service.get_leaderboard()
        return Utils.create_response(data["data"], data["success"], data.get("error", ""))
    except Exception as e:
        raise HTTPException(status_code=400, detail={"data": None, "error": str(e), "success": False})


@router.get("/search", response_model=ServerResponse)
def search_by_number(number: str = "", service: LeaderboardService = Depends(get_leaderboard_service)):
    try:
        data = service.search(number)
        return Utils.create_response(data["data"], data["success"], data.get("error", ""))
    except Exception as e:
        raise HTTPException(status_code=400, detail={"data": None, "error": str(e), "success": False})


@router.get("/points", response_model=ServerResponse)
def get_points_leaderboard(service: LeaderboardService = Depends(get_leaderboard_service)):
    try:
        data = service.get_points_leaderboard()
        return Utils.create_response(data["data"], data["success"], data.get("error", ""))
    except Exception as e:
        raise HTTPException(status_code=400, detail={"data": None, "error": str(e), "success": False})
