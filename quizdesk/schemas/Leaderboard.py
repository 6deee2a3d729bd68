from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class LeaderboardEntry(BaseModel):
    rank: int = 0
    id: str
    name: str = ""
    number: str = ""
    correctCount: int = 0
    timeSpent: int = 0
    answers: list = []


class PointsEntry(BaseModel):
    rank: int = 0
    phoneNumber: str
    name: str = ""
    totalPoints: int = 0
    answersCount: int = 0


class RankedAnswer(BaseModel):
    id: str
    name: str = ""
    phoneNumber: str = ""
    submittedAt: Optional[datetime] = None
    points: int


class LeaderboardView(BaseModel):
    podium: List[LeaderboardEntry] = []
    entries: List[LeaderboardEntry] = []
