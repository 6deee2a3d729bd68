from datetime import datetime
from typing import List, Optional

from bson import ObjectId
from pydantic import BaseModel, Field, field_validator

from quizdesk.schemas.PyObjectId import PyObjectId


class SubmittedAnswer(BaseModel):
    questionId: str = ""
    questionText: str = ""
    selected: str = ""
    correctAnswer: Optional[str] = None
    isCorrect: bool = False

    @field_validator("questionId", "questionText", "selected", "isCorrect", mode="before")
    @classmethod
    def missing_to_default(cls, value, info):
        if value is None:
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)
        return value


class Submission(BaseModel):
    id: Optional[PyObjectId] = Field(default=None, alias="_id")
    name: str = ""
    email: str = ""
    number: str = ""
    place: str = ""
    submittedAt: Optional[datetime] = None
    answers: List[SubmittedAnswer] = []
    totalQuestions: int = 0
    answeredQuestions: int = 0
    timeSpent: int = 0

    class Config:
        populate_by_name = True
        arbitrary_types_allowed = True
        json_encoders = {ObjectId: str}

    # Submissions are written by the quiz flow only by convention; older or
    # hand-edited documents may carry nulls where a value is expected.
    @field_validator("name", "email", "number", "place", "answers",
                     "totalQuestions", "answeredQuestions", "timeSpent", mode="before")
    @classmethod
    def missing_to_default(cls, value, info):
        if value is None:
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)
        return value

    @property
    def correct_count(self) -> int:
        return sum(1 for answer in self.answers if answer.isCorrect)
