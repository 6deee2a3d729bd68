import logging
import random
from datetime import datetime
from typing import Callable, Optional

from quizdesk.helpers.Config import get_quiz_duration_seconds
from quizdesk.helpers.QuizFlow import AUTO_ADVANCE_DELAY_MS, QuizFlow, QuizFlowError
from quizdesk.helpers.Utilities import Utils
from quizdesk.models.QuizSessions import QuizSessionModel
from quizdesk.models.Questions import QuestionsModel
from quizdesk.models.Submissions import SubmissionsModel
from quizdesk.schemas.QuizSession import QuizSessionState, QuizStep, SessionQuestion, StartRequest, UserDetails

logger = logging.getLogger(__name__)

SESSION_NOT_FOUND_ERROR = "Quiz session not found"


class QuizFlowService:
    def __init__(self, rng: Optional[random.Random] = None):
        self.session_model = QuizSessionModel()
        self.questions_model = QuestionsModel()
        self.submissions_model = SubmissionsModel()
        self.rng = rng or random.Random()

    def _new_state(self) -> QuizSessionState:
        duration = get_quiz_duration_seconds()
        return QuizSessionState(
            sessionId=Utils.generate_hex_string(),
            timeLeft=duration,
            duration=duration,
        )

    @staticmethod
    def _view(state: QuizSessionState) -> dict:
        data = state.public_view()
        data["autoAdvanceDelayMs"] = AUTO_ADVANCE_DELAY_MS
        return data

    def create_session(self) -> dict:
        try:
            state = self._new_state()
            self.session_model.create(state)
            return {"success": True, "data": self._view(state)}
        except Exception as e:
            logger.exception("Unable to create quiz session")
            return {"success": False, "data": None, "error": f"Unable to create quiz session: {str(e)}"}

    def get_session(self, session_id: str) -> dict:
        """
        Resume a session. An unknown or unreadable session starts over under
        a new id, the same as a browser with nothing in local storage.
        """
        try:
            if self.session_model.load(session_id) is None:
                return self.create_session()
        except Exception as e:
            logger.exception("Unable to load quiz session %s", session_id)
            return {"success": False, "data": None, "error": f"Unable to load quiz session: {str(e)}"}
        return self._run(session_id)

    def start(self, session_id: str, body: StartRequest) -> dict:
        details = UserDetails(**body.model_dump())

        def action(flow: QuizFlow):
            if flow.state.step == QuizStep.START and not details.is_complete():
                raise QuizFlowError("Please fill all details")
            questions = [] if flow.state.questions else self._fetch_questions()
            flow.begin(details, questions)

        return self._run(session_id, action)

    def select(self, session_id: str, option: str) -> dict:
        return self._run(session_id, lambda flow: flow.select(option))

    def save(self, session_id: str) -> dict:
        return self._run(session_id, lambda flow: flow.save())

    def skip(self, session_id: str) -> dict:
        return self._run(session_id, lambda flow: flow.skip())

    def next(self, session_id: str) -> dict:
        return self._run(session_id, lambda flow: flow.next())

    def prev(self, session_id: str) -> dict:
        return self._run(session_id, lambda flow: flow.prev())

    def complete(self, session_id: str) -> dict:
        return self._run(session_id, lambda flow: flow.complete())

    def sweep_expired(self, now: Optional[datetime] = None) -> int:
        """Complete sessions whose clock ran out while nobody was polling them."""
        now = now or datetime.utcnow()
        completed = 0
        for session_id in self.session_model.expired_candidates(now):
            result = self._run(session_id, now=now)
            if result["success"] and result["data"] and result["data"]["step"] == "complete":
                completed += 1
        if completed:
            logger.info("Completed %s expired quiz session(s)", completed)
        return completed

    def _fetch_questions(self) -> list:
        try:
            return [
                SessionQuestion(
                    id=question.id,
                    questionText=question.questionText,
                    options=question.options or [],
                    correctAnswer=question.correctAnswer,
                )
                for question in self.questions_model.get_all_questions()
            ]
        except Exception:
            logger.exception("Error fetching questions")
            return []

    def _run(self, session_id: str, action: Optional[Callable] = None, now: Optional[datetime] = None) -> dict:
        try:
            state = self.session_model.load(session_id)
        except Exception as e:
            logger.exception("Unable to load quiz session %s", session_id)
            return {"success": False, "data": None, "error": f"Unable to load quiz session: {str(e)}"}
        if state is None:
            return {"success": False, "data": None, "error": SESSION_NOT_FOUND_ERROR}

        flow = QuizFlow(state, self.rng)
        completed_now = flow.catch_up(now)
        error = None
        if action is not None and not completed_now:
            try:
                completed_now = bool(action(flow))
            except QuizFlowError as e:
                error = str(e)

        try:
            if completed_now:
                self._finish(flow)
            else:
                self.session_model.save(state)
        except Exception as e:
            logger.exception("Unable to save quiz session %s", session_id)
            return {"success": False, "data": None, "error": f"Unable to save quiz session: {str(e)}"}

        if error:
            return {"success": False, "data": self._view(state), "error": error}
        return {"success": True, "data": self._view(state)}

    def _finish(self, flow: QuizFlow) -> None:
        state = flow.state
        if not self.session_model.claim_completion(state):
            # Another request or the sweep already completed this session.
            logger.info("Quiz session %s was already completed", state.sessionId)
            return
        try:
            submission_id = self.submissions_model.create_submission(flow.build_submission())
        except Exception:
            # The respondent still sees the completion screen; the claimed
            # session is kept so the answers are not lost.
            logger.exception("Error saving answers for quiz session %s", state.sessionId)
            return
        state.submissionId = str(submission_id)
        self.session_model.delete(state.sessionId)
        logger.info("Submission %s stored for quiz session %s", submission_id, state.sessionId)
