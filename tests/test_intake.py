"""
Tests for the question-of-the-day intake

Tests cover:
- Active question selection
- Phone number autofill
- Duplicate submission prevention, including the insert race
"""

from datetime import datetime
from unittest.mock import patch

import pytest

from quizdesk.helpers.Database import MongoDB
from quizdesk.models.Answers import AnswersModel
from quizdesk.schemas.Answers import IntakeSubmission
from quizdesk.services.Intake import (
    DUPLICATE_SUBMISSION_ERROR,
    NO_ACTIVE_QUESTION_ERROR,
    PHONE_NOT_FOUND_ERROR,
    IntakeService,
)
from quizdesk.services.Questions import QuestionService

SUBMISSION = IntakeSubmission(name="Yusuf", phoneNumber="9876543210", address="Calicut", answer="Makkah")


@pytest.fixture
def active_question(mongo):
    mongo["questions"].insert_many([
        {"questionText": "Old question", "createdAt": datetime(2026, 1, 1), "isActive": True},
        {"questionText": "Today's question", "correctAnswer": "Makkah", "createdAt": datetime(2026, 1, 2), "isActive": True},
        {"questionText": "Inactive newer", "createdAt": datetime(2026, 1, 3), "isActive": False},
    ])
    return str(mongo["questions"].find_one({"questionText": "Today's question"})["_id"])


class TestActiveQuestion:
    def test_most_recent_active_question_wins(self, active_question):
        data = QuestionService().get_active_question()["data"]
        assert data["id"] == active_question
        assert data["questionText"] == "Today's question"
        assert "correctAnswer" not in data

    def test_no_active_question_returns_none(self, mongo):
        result = QuestionService().get_active_question()
        assert result == {"success": True, "data": None}

    def test_lookup_error_is_swallowed(self, mongo):
        service = QuestionService()
        with patch.object(service.questions_model, "get_active_question", side_effect=RuntimeError("boom")):
            assert service.get_active_question() == {"success": True, "data": None}


class TestAutofill:
    def test_short_phone_number_does_not_query(self, mongo):
        service = IntakeService()
        with patch.object(service.answers_model, "find_by_phone") as find:
            assert service.autofill("98765")["data"] is None
            find.assert_not_called()

    def test_known_phone_number_fills_name_and_address(self, mongo):
        mongo["answers"].insert_one({
            "name": "Yusuf", "phoneNumber": "9876543210", "address": "Calicut",
            "answer": "x", "questionId": "q-old", "isCorrect": False, "points": 0,
        })
        data = IntakeService().autofill("9876543210")["data"]
        assert data == {"name": "Yusuf", "address": "Calicut"}

    def test_unknown_phone_number_fills_nothing(self, mongo):
        assert IntakeService().autofill("1111111111")["data"] is None

    def test_lookup_reports_missing_phone(self, mongo):
        result = IntakeService().lookup("1111111111")
        assert result["success"] is False
        assert result["error"] == PHONE_NOT_FOUND_ERROR


class TestSubmit:
    def test_submit_stores_answer_with_defaults(self, mongo, active_question):
        result = IntakeService().submit(SUBMISSION)
        assert result["success"], result

        stored = mongo["answers"].find_one({"phoneNumber": "9876543210"})
        assert stored["questionId"] == active_question
        assert stored["isCorrect"] is False
        assert stored["points"] == 0
        assert stored["submittedAt"] is not None

    def test_second_submit_is_rejected(self, mongo, active_question):
        service = IntakeService()
        service.submit(SUBMISSION)
        result = service.submit(SUBMISSION)
        assert result["success"] is False
        assert result["error"] == DUPLICATE_SUBMISSION_ERROR
        assert mongo["answers"].count_documents({}) == 1

    def test_same_phone_can_answer_a_new_question(self, mongo, active_question):
        service = IntakeService()
        service.submit(SUBMISSION)
        mongo["questions"].insert_one({"questionText": "Tomorrow", "createdAt": datetime(2026, 2, 1), "isActive": True})
        assert service.submit(SUBMISSION)["success"]
        assert mongo["answers"].count_documents({"phoneNumber": "9876543210"}) == 2

    def test_racing_duplicate_is_rejected_by_index(self, mongo, active_question):
        service = IntakeService()
        service.submit(SUBMISSION)
        with patch.object(service.answers_model, "exists", return_value=False):
            result = service.submit(SUBMISSION)
        assert result["error"] == DUPLICATE_SUBMISSION_ERROR
        assert mongo["answers"].count_documents({}) == 1

    def test_submit_without_active_question(self, mongo):
        result = IntakeService().submit(SUBMISSION)
        assert result["error"] == NO_ACTIVE_QUESTION_ERROR

    def test_blank_fields_are_rejected(self, mongo, active_question):
        result = IntakeService().submit(SUBMISSION.model_copy(update={"answer": "   "}))
        assert result["success"] is False
        assert mongo["answers"].count_documents({}) == 0


class TestAnswersIndex:
    def test_legacy_duplicates_do_not_block_startup(self, mongo, active_question):
        mongo["answers"].drop_indexes()
        duplicate = {"name": "Yusuf", "phoneNumber": "9876543210", "questionId": active_question, "answer": "x"}
        mongo["answers"].insert_many([dict(duplicate), dict(duplicate)])

        MongoDB.ensure_indexes("quizdesk_test")

        service = IntakeService()
        assert service.submit(SUBMISSION)["error"] == DUPLICATE_SUBMISSION_ERROR
        assert service.autofill("9876543210")["data"] == {"name": "Yusuf", "address": ""}

    def test_constructing_the_model_leaves_indexes_alone(self, mongo):
        mongo["answers"].drop_indexes()
        AnswersModel()
        assert "uniq_question_phone" not in mongo["answers"].index_information()
