from datetime import datetime
from typing import List, Optional

from bson import ObjectId
from pydantic import BaseModel, Field

from quizdesk.schemas.PyObjectId import PyObjectId


class Question(BaseModel):
    id: Optional[PyObjectId] = Field(default=None, alias="_id")
    questionText: str = ""
    options: Optional[List[str]] = None
    correctAnswer: Optional[str] = None
    createdAt: Optional[datetime] = None
    isActive: bool = True

    class Config:
        populate_by_name = True
        arbitrary_types_allowed = True
        json_encoders = {ObjectId: str}

    def public_view(self) -> dict:
        """Question as shown to respondents, without the correct answer."""
        return {
            "id": self.id,
            "questionText": self.questionText,
            "options": self.options,
            "createdAt": self.createdAt,
        }


class QuestionCreate(BaseModel):
    questionText: str = ""
    options: Optional[List[str]] = None
    correctAnswer: Optional[str] = None
