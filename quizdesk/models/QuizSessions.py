import logging
from datetime import datetime
from typing import List, Optional

from pydantic import ValidationError

from quizdesk.helpers.Config import get_db_name
from quizdesk.helpers.Database import MongoDB
from quizdesk.schemas.QuizSession import QuizSessionState, QuizStep

logger = logging.getLogger(__name__)


class QuizSessionModel:
    """
    Load/save boundary for resumable quiz sessions. One document per
    session, keyed by the session id the respondent's client holds.
    """

    def __init__(self, db_name: Optional[str] = None, collection_name: str = "quizSessions"):
        self.collection = MongoDB.get_database(db_name or get_db_name())[collection_name]

    def load(self, session_id: str) -> Optional[QuizSessionState]:
        document = self.collection.find_one({"_id": session_id})
        if not document:
            return None
        document.pop("_id", None)
        try:
            return QuizSessionState(**document)
        except ValidationError as e:
            logger.warning("Discarding quiz session %s with invalid schema: %s", session_id, e.error_count())
            self.collection.delete_one({"_id": session_id})
            return None

    def _document(self, state: QuizSessionState) -> dict:
        document = state.model_dump()
        document["_id"] = state.sessionId
        document["step"] = state.step.value
        return document

    def create(self, state: QuizSessionState) -> None:
        self.collection.insert_one(self._document(state))

    def save(self, state: QuizSessionState) -> bool:
        """
        Write back an in-progress session. A session that is already complete,
        or gone, is left alone so a stale request cannot bring it back.
        """
        result = self.collection.replace_one(
            {"_id": state.sessionId, "step": {"$ne": QuizStep.COMPLETE.value}},
            self._document(state),
        )
        return result.matched_count == 1

    def claim_completion(self, state: QuizSessionState) -> bool:
        """
        Store the completed state only if the stored session is still in quiz.
        Exactly one caller gets True for a given session.
        """
        result = self.collection.replace_one(
            {"_id": state.sessionId, "step": QuizStep.QUIZ.value},
            self._document(state),
        )
        return result.matched_count == 1

    def delete(self, session_id: str) -> bool:
        result = self.collection.delete_one({"_id": session_id})
        return result.deleted_count > 0

    def expired_candidates(self, now: datetime) -> List[str]:
        """
        Ids of sessions still in quiz whose clock would have run out by now.
        The precise check happens when the session is loaded and ticked.
        """
        cursor = self.collection.find(
            {"step": QuizStep.QUIZ.value, "lastTickAt": {"$lte": now}},
            {"_id": 1, "lastTickAt": 1, "timeLeft": 1},
        )
        expired = []
        for document in cursor:
            elapsed = (now - document["lastTickAt"]).total_seconds()
            if elapsed >= document.get("timeLeft", 0):
                expired.append(document["_id"])
        return expired
