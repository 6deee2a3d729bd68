import json
import logging
from datetime import date, datetime
from typing import List, Optional

from bson import ObjectId
from fastapi.encoders import jsonable_encoder

from quizdesk.helpers.CsvExport import export_filename, rows_to_csv
from quizdesk.helpers.Utilities import Utils
from quizdesk.models.Answers import AnswersModel
from quizdesk.models.Submissions import SubmissionsModel
from quizdesk.schemas.Dashboard import DashboardFilters, DashboardList, DashboardRow, SortOrder, SubmissionSource
from quizdesk.schemas.Leaderboard import RankedAnswer

logger = logging.getLogger(__name__)

RANK_POINTS = [10, 9, 8]
DEFAULT_POINTS = 5


def points_for_rank(position: int) -> int:
    """Points for the n-th (0-based) correct responder."""
    if position < len(RANK_POINTS):
        return RANK_POINTS[position]
    return DEFAULT_POINTS


def normalize_answer(document: dict) -> DashboardRow:
    is_correct = bool(document.get("isCorrect"))
    return DashboardRow(
        id=str(document.get("_id")),
        name=document.get("name") or "",
        phone=document.get("phoneNumber") or "",
        place=document.get("address") or "",
        answer=document.get("answer") or "",
        answeredQuestions=1,
        totalQuestions=1,
        score="Correct" if is_correct else "Incorrect",
        isCorrect=is_correct,
        points=document.get("points") or 0,
        submittedAt=document.get("submittedAt"),
    )


def normalize_submission(document: dict) -> DashboardRow:
    answers = document.get("answers") or []
    correct = sum(1 for answer in answers if answer.get("isCorrect"))
    return DashboardRow(
        id=str(document.get("_id")),
        name=document.get("name") or "",
        email=document.get("email") or "",
        phone=document.get("number") or "",
        place=document.get("place") or "",
        answeredQuestions=document.get("answeredQuestions") or len(answers),
        totalQuestions=document.get("totalQuestions") or 0,
        score=f"{correct}/{len(answers)}",
        submittedAt=document.get("submittedAt"),
    )


def parse_filter_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as e:
        raise ValueError(f"Invalid date filter: {value}") from e


def apply_filters(rows: List[DashboardRow], filters: DashboardFilters) -> List[DashboardRow]:
    filtered = list(rows)

    filter_date = parse_filter_date(filters.date)
    if filter_date:
        filtered = [row for row in filtered if row.submittedAt and row.submittedAt.date() == filter_date]

    if filters.search:
        term = filters.search.lower()
        filtered = [
            row for row in filtered
            if any(term in field.lower() for field in (row.name, row.email, row.answer, row.phone, row.place))
        ]

    # Rows without a timestamp stay where they are; the rest are reordered
    # among the remaining slots.
    slots = [index for index, row in enumerate(filtered) if row.submittedAt]
    dated = sorted(
        (filtered[index] for index in slots),
        key=lambda row: row.submittedAt,
        reverse=filters.sort == SortOrder.NEWEST,
    )
    for index, row in zip(slots, dated):
        filtered[index] = row
    return filtered


class DashboardService:
    """One admin view over either the answers or the submissions collection."""

    def __init__(self):
        self.answers_model = AnswersModel()
        self.submissions_model = SubmissionsModel()

    def _rows(self, source: SubmissionSource) -> List[DashboardRow]:
        if source == SubmissionSource.ANSWERS:
            return [normalize_answer(document) for document in self.answers_model.list_answers()]
        return [normalize_submission(document) for document in self.submissions_model.list_submissions()]

    def _filtered(self, source: SubmissionSource, filters: DashboardFilters) -> DashboardList:
        rows = self._rows(source)
        filtered = apply_filters(rows, filters)
        return DashboardList(rows=filtered, total=len(rows), count=len(filtered))

    def list_rows(self, source: SubmissionSource, filters: DashboardFilters) -> dict:
        try:
            return {"success": True, "data": self._filtered(source, filters).model_dump()}
        except ValueError as e:
            return {"success": False, "data": None, "error": str(e)}
        except Exception as e:
            logger.exception("Unable to list %s", source.value)
            return {"success": False, "data": None, "error": f"Unable to list {source.value}: {str(e)}"}

    def get_detail(self, source: SubmissionSource, document_id: str) -> dict:
        try:
            if not ObjectId.is_valid(document_id):
                return {"success": False, "data": None, "error": "Invalid ID"}
            if source == SubmissionSource.ANSWERS:
                document = self.answers_model.get_answer(document_id)
            else:
                document = self.submissions_model.get_submission(document_id)
            if not document:
                return {"success": False, "data": None, "error": "Not found"}
            return {"success": True, "data": document}
        except Exception as e:
            logger.exception("Unable to fetch %s %s", source.value, document_id)
            return {"success": False, "data": None, "error": f"Unable to fetch {source.value}: {str(e)}"}

    def export_csv(self, source: SubmissionSource, filters: DashboardFilters) -> dict:
        try:
            view = self._filtered(source, filters)
            return {
                "success": True,
                "data": {"filename": export_filename(source.value), "content": rows_to_csv(view.rows)}
            }
        except ValueError as e:
            return {"success": False, "data": None, "error": str(e)}
        except Exception as e:
            logger.exception("CSV export of %s failed", source.value)
            return {"success": False, "data": None, "error": f"Unable to export {source.value}: {str(e)}"}

    def open_change_stream(self, source: SubmissionSource):
        if source == SubmissionSource.ANSWERS:
            return self.answers_model.watch()
        return self.submissions_model.watch()

    def snapshot_event(self, source: SubmissionSource, filters: DashboardFilters) -> str:
        """A Server-Sent Events frame carrying the current filtered list."""
        view = self._filtered(source, filters)
        payload = jsonable_encoder(Utils.serialize(view.model_dump()))
        return f"data: {json.dumps(payload)}\n\n"

    def mark_correct(self, answer_id: str) -> dict:
        """
        Mark one answer correct, then re-rank every correct answer to the same
        question by submission time. The ranking is recomputed in full each
        time, so repeated or overlapping runs settle on the same points.
        """
        try:
            if not ObjectId.is_valid(answer_id):
                return {"success": False, "data": None, "error": "Invalid Answer ID"}
            answer = self.answers_model.mark_correct(answer_id)
            if not answer:
                return {"success": False, "data": None, "error": "Answer not found"}

            ranked = []
            for position, document in enumerate(self.answers_model.correct_answers_in_order(answer["questionId"])):
                points = points_for_rank(position)
                if document.get("points") != points:
                    self.answers_model.set_points(document["_id"], points)
                ranked.append(RankedAnswer(
                    id=str(document["_id"]),
                    name=document.get("name") or "",
                    phoneNumber=document.get("phoneNumber") or "",
                    submittedAt=document.get("submittedAt"),
                    points=points,
                ).model_dump())
            logger.info("Marked answer %s correct; %s correct answer(s) ranked", answer_id, len(ranked))
            return {"success": True, "data": ranked}
        except Exception as e:
            logger.exception("Unable to mark answer %s correct", answer_id)
            return {"success": False, "data": None, "error": f"Unable to mark answer correct: {str(e)}"}
