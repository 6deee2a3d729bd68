import logging

from pymongo.errors import DuplicateKeyError

from quizdesk.models.Answers import AnswersModel
from quizdesk.models.Questions import QuestionsModel
from quizdesk.schemas.Answers import AutofillResult, IntakeSubmission

logger = logging.getLogger(__name__)

AUTOFILL_MIN_LENGTH = 10
NO_ACTIVE_QUESTION_ERROR = "Today's question is not loaded yet. Please wait a moment."
DUPLICATE_SUBMISSION_ERROR = "You have already submitted an answer for today's question."
GENERIC_SUBMIT_ERROR = "Something went wrong. Please try again."
PHONE_NOT_FOUND_ERROR = "Phone number not found!"
MISSING_FIELDS_ERROR = "Please fill all fields"


class IntakeService:
    """Single question of the day: autofill by phone number and one answer per phone."""

    def __init__(self):
        self.answers_model = AnswersModel()
        self.questions_model = QuestionsModel()

    def autofill(self, phone_number: str) -> dict:
        if len(phone_number or "") < AUTOFILL_MIN_LENGTH:
            return {"success": True, "data": None}
        try:
            previous = self.answers_model.find_by_phone(phone_number)
            if not previous:
                return {"success": True, "data": None}
            return {
                "success": True,
                "data": AutofillResult(name=previous.name or "", address=previous.address or "").model_dump()
            }
        except Exception:
            logger.exception("Autofill lookup failed for %s", phone_number)
            return {"success": True, "data": None}

    def lookup(self, phone_number: str) -> dict:
        if len(phone_number or "") < AUTOFILL_MIN_LENGTH:
            return {"success": False, "data": None, "error": PHONE_NOT_FOUND_ERROR}
        try:
            previous = self.answers_model.find_by_phone(phone_number)
        except Exception as e:
            logger.exception("Phone lookup failed for %s", phone_number)
            return {"success": False, "data": None, "error": f"Unable to look up phone number: {str(e)}"}
        if not previous:
            return {"success": False, "data": None, "error": PHONE_NOT_FOUND_ERROR}
        return {
            "success": True,
            "data": AutofillResult(name=previous.name or "", address=previous.address or "").model_dump()
        }

    def submit(self, body: IntakeSubmission) -> dict:
        if not all(value.strip() for value in (body.name, body.phoneNumber, body.address, body.answer)):
            return {"success": False, "data": None, "error": MISSING_FIELDS_ERROR}

        try:
            question = self.questions_model.get_active_question()
        except Exception:
            logger.exception("Error fetching today's question")
            question = None
        if not question or not question.id:
            return {"success": False, "data": None, "error": NO_ACTIVE_QUESTION_ERROR}

        try:
            if self.answers_model.exists(question.id, body.phoneNumber):
                return {"success": False, "data": None, "error": DUPLICATE_SUBMISSION_ERROR}

            data = body.model_dump()
            data["questionId"] = question.id
            inserted_id = self.answers_model.create_answer(data)
            logger.info("Answer %s stored for question %s", inserted_id, question.id)
            return {"success": True, "data": str(inserted_id)}
        except DuplicateKeyError:
            # Lost the race against a concurrent submit from the same phone.
            return {"success": False, "data": None, "error": DUPLICATE_SUBMISSION_ERROR}
        except Exception:
            logger.exception("Error storing answer for question %s", question.id)
            return {"success": False, "data": None, "error": GENERIC_SUBMIT_ERROR}
