from datetime import datetime
from typing import Optional

from bson import ObjectId
from pydantic import BaseModel, Field

from quizdesk.schemas.PyObjectId import PyObjectId


class Answer(BaseModel):
    id: Optional[PyObjectId] = Field(default=None, alias="_id")
    name: str = ""
    phoneNumber: str = ""
    address: str = ""
    answer: str = ""
    questionId: str
    submittedAt: Optional[datetime] = None
    isCorrect: bool = False
    points: int = 0

    class Config:
        populate_by_name = True
        arbitrary_types_allowed = True
        json_encoders = {ObjectId: str}


class IntakeSubmission(BaseModel):
    name: str
    phoneNumber: str
    address: str
    answer: str


class AutofillResult(BaseModel):
    name: str = ""
    address: str = ""
