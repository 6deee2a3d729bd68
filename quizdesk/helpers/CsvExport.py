import csv
import io
from datetime import date, datetime
from typing import Iterable, List, Optional

from quizdesk.schemas.Dashboard import DashboardRow

CSV_HEADERS = [
    "Name", "Email", "Phone", "Place", "Answer",
    "Questions Answered", "Total Questions", "Score", "Points", "Date",
]


def format_date(value: Optional[datetime]) -> str:
    if not value:
        return "No date"
    return value.strftime("%b %d, %Y %I:%M %p")


def rows_to_csv(rows: Iterable[DashboardRow]) -> str:
    """Every field quoted, embedded quotes doubled, one line per row."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for row in rows:
        writer.writerow(_row_fields(row))
    return buffer.getvalue()


def _row_fields(row: DashboardRow) -> List[str]:
    return [
        row.name,
        row.email,
        row.phone,
        row.place,
        row.answer,
        str(row.answeredQuestions),
        str(row.totalQuestions),
        row.score,
        str(row.points),
        format_date(row.submittedAt),
    ]


def export_filename(source: str, today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"quiz_{source}_{today.isoformat()}.csv"
