"""State machine for the timed multi-question quiz: start -> quiz -> complete."""

import logging
import random
from datetime import datetime, timedelta
from typing import List, Optional

from quizdesk.schemas.QuizSession import QuizSessionState, QuizStep, SessionQuestion, UserDetails

logger = logging.getLogger(__name__)

AUTO_ADVANCE_DELAY_MS = 300


class QuizFlowError(Exception):
    """A respondent action that is not allowed in the current state."""


class QuizFlow:
    def __init__(self, state: QuizSessionState, rng: Optional[random.Random] = None):
        self.state = state
        self.rng = rng or random.Random()

    @property
    def is_complete(self) -> bool:
        return self.state.step == QuizStep.COMPLETE

    def _require_quiz(self) -> SessionQuestion:
        if self.state.step == QuizStep.COMPLETE:
            raise QuizFlowError("Quiz already completed")
        if self.state.step != QuizStep.QUIZ:
            raise QuizFlowError("Quiz has not started")
        question = self.state.current_question()
        if question is None:
            raise QuizFlowError("No question available")
        return question

    def begin(self, details: UserDetails, questions: List[SessionQuestion], now: Optional[datetime] = None) -> None:
        if self.state.step == QuizStep.COMPLETE:
            raise QuizFlowError("Quiz already completed")
        if self.state.step == QuizStep.QUIZ:
            return
        if not details.is_complete():
            raise QuizFlowError("Please fill all details")

        # A resumed session keeps the order it was given the first time.
        if not self.state.questions:
            if not questions:
                raise QuizFlowError("No questions are available yet")
            shuffled = list(questions)
            self.rng.shuffle(shuffled)
            self.state.questions = shuffled

        self.state.userDetails = details
        self.state.step = QuizStep.QUIZ
        self.state.currentIndex = 0
        self.state.lastTickAt = now or datetime.utcnow()

    def select(self, option: str) -> None:
        question = self._require_quiz()
        if question.options and option not in question.options:
            raise QuizFlowError("Option is not one of the question's options")
        self.state.answers[question.id] = option
        if question.id not in self.state.selectedButUnsaved:
            self.state.selectedButUnsaved.append(question.id)

    def save(self) -> None:
        question = self._require_quiz()
        if not self.state.answers.get(question.id):
            raise QuizFlowError("Please select an option before saving.")
        self.state.unsavedQuestions = [qid for qid in self.state.unsavedQuestions if qid != question.id]
        self.state.selectedButUnsaved = [qid for qid in self.state.selectedButUnsaved if qid != question.id]
        self._advance()

    def next(self) -> None:
        question = self._require_quiz()
        if not self.state.answers.get(question.id) and question.id not in self.state.unsavedQuestions:
            self.state.unsavedQuestions.append(question.id)
        self._advance()

    def skip(self) -> None:
        self.next()

    def prev(self) -> None:
        self._require_quiz()
        if self.state.currentIndex > 0:
            self.state.currentIndex -= 1

    def _advance(self) -> None:
        if self.state.currentIndex < len(self.state.questions) - 1:
            self.state.currentIndex += 1

    def tick(self, seconds: int = 1) -> bool:
        """
        Run the countdown for `seconds` one-second ticks. Returns True when
        this call is the one that ran the clock out and completed the quiz.
        """
        if self.state.step != QuizStep.QUIZ:
            return False
        for _ in range(max(seconds, 0)):
            self.state.timeLeft = max(self.state.timeLeft - 1, 0)
            if self.state.timeLeft <= 0:
                return self.complete()
        return False

    def catch_up(self, now: Optional[datetime] = None) -> bool:
        """Apply the whole seconds elapsed since the last tick."""
        if self.state.step != QuizStep.QUIZ or self.state.lastTickAt is None:
            return False
        now = now or datetime.utcnow()
        elapsed = int((now - self.state.lastTickAt).total_seconds())
        if elapsed <= 0:
            return False
        self.state.lastTickAt = self.state.lastTickAt + timedelta(seconds=elapsed)
        return self.tick(elapsed)

    def complete(self, now: Optional[datetime] = None) -> bool:
        """Returns True only on the transition into complete."""
        if self.state.step == QuizStep.COMPLETE:
            return False
        if self.state.step != QuizStep.QUIZ:
            raise QuizFlowError("Quiz has not started")
        self.state.step = QuizStep.COMPLETE
        self.state.completedAt = now or datetime.utcnow()
        logger.info("Quiz session %s completed with %ss left", self.state.sessionId, self.state.timeLeft)
        return True

    def build_submission(self) -> dict:
        """The submissions document for a completed session, minus submittedAt."""
        answered = []
        for question in self.state.questions:
            selected = self.state.answers.get(question.id)
            if not selected or question.id in self.state.unsavedQuestions:
                continue
            answered.append({
                "questionId": question.id,
                "questionText": question.questionText,
                "selected": selected,
                "correctAnswer": question.correctAnswer or None,
                "isCorrect": selected == question.correctAnswer,
            })

        details = self.state.userDetails
        return {
            "name": details.name,
            "email": details.email,
            "number": details.number,
            "place": details.place,
            "answers": answered,
            "totalQuestions": len(self.state.questions),
            "answeredQuestions": len(answered),
            "timeSpent": self.state.duration - self.state.timeLeft,
        }
