import logging
from typing import List

from quizdesk.models.Answers import AnswersModel
from quizdesk.models.Submissions import SubmissionsModel
from quizdesk.schemas.Leaderboard import LeaderboardEntry, LeaderboardView, PointsEntry
from quizdesk.schemas.Submissions import Submission

logger = logging.getLogger(__name__)

PODIUM_SIZE = 3
NOT_FOUND_ERROR = "No submission found with this number"


def rank_submissions(submissions: List[Submission]) -> List[LeaderboardEntry]:
    """Most correct answers first; equal scores go to whoever was faster."""
    entries = [
        LeaderboardEntry(
            id=str(submission.id),
            name=submission.name,
            number=submission.number,
            correctCount=submission.correct_count,
            timeSpent=submission.timeSpent or 0,
            answers=[answer.model_dump() for answer in submission.answers],
        )
        for submission in submissions
    ]
    entries.sort(key=lambda entry: (-entry.correctCount, entry.timeSpent))
    for position, entry in enumerate(entries, start=1):
        entry.rank = position
    return entries


class LeaderboardService:
    def __init__(self):
        self.submissions_model = SubmissionsModel()
        self.answers_model = AnswersModel()

    def get_leaderboard(self) -> dict:
        try:
            entries = rank_submissions(self.submissions_model.get_all_submissions())
            view = LeaderboardView(podium=entries[:PODIUM_SIZE], entries=entries)
            return {"success": True, "data": view.model_dump()}
        except Exception as e:
            logger.exception("Error fetching leaderboard")
            return {"success": False, "data": None, "error": f"Unable to fetch leaderboard: {str(e)}"}

    def search(self, number: str) -> dict:
        if not number:
            return {"success": False, "data": None, "error": NOT_FOUND_ERROR}
        try:
            submission = self.submissions_model.find_by_number(number)
        except Exception as e:
            logger.exception("Leaderboard search failed for %s", number)
            return {"success": False, "data": None, "error": f"Unable to search submissions: {str(e)}"}
        if not submission:
            return {"success": False, "data": None, "error": NOT_FOUND_ERROR}
        data = submission.model_dump()
        data["correctCount"] = submission.correct_count
        return {"success": True, "data": data}

    def get_points_leaderboard(self) -> dict:
        """Total points per phone number across single-question answers."""
        try:
            rows = self.answers_model.points_by_phone()
            entries = [
                PointsEntry(
                    rank=position,
                    phoneNumber=row["_id"] or "",
                    name=row.get("name") or "",
                    totalPoints=row.get("totalPoints", 0),
                    answersCount=row.get("answersCount", 0),
                ).model_dump()
                for position, row in enumerate(rows, start=1)
            ]
            return {"success": True, "data": entries}
        except Exception as e:
            logger.exception("Error fetching points leaderboard")
            return {"success": False, "data": None, "error": f"Unable to fetch leaderboard: {str(e)}"}
