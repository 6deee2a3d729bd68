from datetime import datetime
from enum import Enum
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

SCHEMA_VERSION = 1


class QuizStep(str, Enum):
    START = "start"
    QUIZ = "quiz"
    COMPLETE = "complete"


class UserDetails(BaseModel):
    name: str = ""
    email: str = ""
    number: str = ""
    place: str = ""

    def is_complete(self) -> bool:
        return all(value.strip() for value in (self.name, self.email, self.number, self.place))


class SessionQuestion(BaseModel):
    id: str
    questionText: str = ""
    options: List[str] = []
    correctAnswer: Optional[str] = None


class QuizSessionState(BaseModel):
    """
    Everything a respondent's in-progress quiz needs to resume after a
    reload. Stored as one document; anything that does not validate against
    this shape is discarded on load.
    """
    schemaVersion: Literal[1] = SCHEMA_VERSION
    sessionId: str
    step: QuizStep = QuizStep.START
    userDetails: UserDetails = Field(default_factory=UserDetails)
    currentIndex: int = 0
    answers: Dict[str, str] = {}
    timeLeft: int
    duration: int
    unsavedQuestions: List[str] = []
    selectedButUnsaved: List[str] = []
    questions: List[SessionQuestion] = []
    lastTickAt: Optional[datetime] = None
    createdAt: datetime = Field(default_factory=datetime.utcnow)
    completedAt: Optional[datetime] = None
    submissionId: Optional[str] = None

    def current_question(self) -> Optional[SessionQuestion]:
        if 0 <= self.currentIndex < len(self.questions):
            return self.questions[self.currentIndex]
        return None

    def public_view(self) -> dict:
        """Session as returned to the respondent: correct answers stripped."""
        data = self.model_dump(exclude={"questions"})
        data["questions"] = [
            {"id": q.id, "questionText": q.questionText, "options": q.options}
            for q in self.questions
        ]
        data["totalQuestions"] = len(self.questions)
        return data


class StartRequest(BaseModel):
    name: str = ""
    email: str = ""
    number: str = ""
    place: str = ""


class SelectRequest(BaseModel):
    option: str
