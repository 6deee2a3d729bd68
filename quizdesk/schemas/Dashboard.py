from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel


class SubmissionSource(str, Enum):
    ANSWERS = "answers"
    SUBMISSIONS = "submissions"


class SortOrder(str, Enum):
    NEWEST = "newest"
    OLDEST = "oldest"


class DashboardRow(BaseModel):
    """One row of the admin list, the same shape for either collection."""
    id: str
    name: str = ""
    email: str = ""
    phone: str = ""
    place: str = ""
    answer: str = ""
    answeredQuestions: int = 0
    totalQuestions: int = 0
    score: str = ""
    isCorrect: Optional[bool] = None
    points: int = 0
    submittedAt: Optional[datetime] = None


class DashboardFilters(BaseModel):
    date: Optional[str] = None
    search: Optional[str] = None
    sort: SortOrder = SortOrder.NEWEST


class DashboardList(BaseModel):
    rows: List[DashboardRow] = []
    total: int = 0
    count: int = 0
