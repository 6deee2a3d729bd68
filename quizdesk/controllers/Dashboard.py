import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response, StreamingResponse

from quizdesk.dependencies import get_dashboard_service
from quizdesk.helpers.Utilities import Utils
from quizdesk.middleware.JWTVerification import admin_validator
from quizdesk.schemas.Dashboard import DashboardFilters, SortOrder, SubmissionSource
from quizdesk.schemas.ServerResponse import ServerResponse
from quizdesk.services.Dashboard import DashboardService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/admin", tags=["Admin"])

STREAM_POLL_SECONDS = 1.0


def _filters(date: Optional[str], search: Optional[str], sort: SortOrder) -> DashboardFilters:
    return DashboardFilters(date=date, search=search, sort=sort)


@router.get("/{source}", response_model=ServerResponse)
def list_rows(
    source: SubmissionSource,
    date: Optional[str] = None,
    search: Optional[str] = None,
    sort: SortOrder = SortOrder.NEWEST,
    service: DashboardService = Depends(get_dashboard_service),
    jwt_payload: dict = Depends(admin_validator)
):
    try:
        data = service.list_rows(source, _filters(date, search, sort))
        return Utils.create_response(data["data"], data["success"], data.get("error", ""))
    except Exception as e:
        raise HTTPException(status_code=400, detail={"data": None, "error": str(e), "success": False})


@router.get("/{source}/export.csv")
def export_csv(
    source: SubmissionSource,
    date: Optional[str] = None,
    search: Optional[str] = None,
    sort: SortOrder = SortOrder.NEWEST,
    service: DashboardService = Depends(get_dashboard_service),
    jwt_payload: dict = Depends(admin_validator)
):
    data = service.export_csv(source, _filters(date, search, sort))
    if not data["success"]:
        raise HTTPException(status_code=400, detail={"data": None, "error": data["error"], "success": False})
    return Response(
        content=data["data"]["content"].encode("utf-8"),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{data["data"]["filename"]}"'},
    )


@router.get("/{source}/stream")
async def stream_rows(
    request: Request,
    source: SubmissionSource,
    date: Optional[str] = None,
    search: Optional[str] = None,
    sort: SortOrder = SortOrder.NEWEST,
    service: DashboardService = Depends(get_dashboard_service),
    jwt_payload: dict = Depends(admin_validator)
):
    filters = _filters(date, search, sort)
    try:
        change_stream = await run_in_threadpool(service.open_change_stream, source)
    except Exception as e:
        logger.error("Realtime updates unavailable for %s: %s", source.value, e)
        raise HTTPException(status_code=400, detail={"data": None, "error": "Realtime updates are unavailable", "success": False})

    async def events():
        try:
            yield await run_in_threadpool(service.snapshot_event, source, filters)
            while not await request.is_disconnected():
                change = await run_in_threadpool(change_stream.try_next)
                if change is None:
                    await asyncio.sleep(STREAM_POLL_SECONDS)
                    continue
                yield await run_in_threadpool(service.snapshot_event, source, filters)
        finally:
            change_stream.close()

    return StreamingResponse(events(), media_type="text/event-stream")


@router.post("/answers/{answer_id}/mark-correct", response_model=ServerResponse)
def mark_correct(
    answer_id: str,
    service: DashboardService = Depends(get_dashboard_service),
    jwt_payload: dict = Depends(admin_validator)
):
    try:
        data = service.mark_correct(answer_id)
        return Utils.create_response(data["data"], data["success"], data.get("error", ""))
    except Exception as e:
        raise HTTPException(status_code=400, detail={"data": None, "error": str(e), "success": False})


@router.get("/{source}/{document_id}", response_model=ServerResponse)
def get_detail(
    source: SubmissionSource,
    document_id: str,
    service: DashboardService = Depends(get_dashboard_service),
    jwt_payload: dict = Depends(admin_validator)
):
    try:
        data = service.get_detail(source, document_id)
        return Utils.create_response(data["data"], data["success"], data.get("error", ""))
    except Exception as e:
        raise HTTPException(status_code=400, detail={"data": None, "error": str(e), "success": False})
