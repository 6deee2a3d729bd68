import logging

from quizdesk.models.Questions import QuestionsModel
from quizdesk.schemas.Questions import QuestionCreate

logger = logging.getLogger(__name__)

INCOMPLETE_QUESTION_ERROR = "Please fill all fields and select the correct answer."


class QuestionService:
    def __init__(self):
        self.questions_model = QuestionsModel()

    def get_active_question(self) -> dict:
        """
        The question of the day. No active question and a failed lookup both
        come back as data=None; the client keeps its placeholder either way.
        """
        try:
            question = self.questions_model.get_active_question()
            return {
                "success": True,
                "data": question.public_view() if question else None
            }
        except Exception:
            logger.exception("Error fetching today's question")
            return {"success": True, "data": None}

    def create_question(self, body: QuestionCreate) -> dict:
        question_text = body.questionText.strip()
        if not question_text:
            return {"success": False, "data": None, "error": "Question text is required."}

        data = {"questionText": question_text}
        if body.options is not None:
            options = [option.strip() for option in body.options]
            if not options or any(not option for option in options) or body.correctAnswer not in options:
                return {"success": False, "data": None, "error": INCOMPLETE_QUESTION_ERROR}
            data["options"] = options
            data["correctAnswer"] = body.correctAnswer
        elif body.correctAnswer:
            data["correctAnswer"] = body.correctAnswer.strip()

        try:
            inserted_id = self.questions_model.create_question(data)
            logger.info("Question %s created", inserted_id)
            return {"success": True, "data": str(inserted_id)}
        except Exception as e:
            logger.exception("Error adding question")
            return {"success": False, "data": None, "error": f"Failed to add question: {str(e)}"}

    def list_questions(self, page: int = 1, limit: int = 50) -> dict:
        try:
            total = self.questions_model.collection.count_documents({})
            total_pages = (total + limit - 1) // limit
            number_to_skip = (page - 1) * limit
            questions = self.questions_model.list_questions({}, number_to_skip, limit)
            return {
                "success": True,
                "data": {
                    "questions": [question.model_dump() for question in questions],
                    "pagination": {
                        "totalPages": total_pages,
                        "currentPage": page,
                        "limit": limit
                    }
                }
            }
        except Exception as e:
            logger.exception("Error listing questions")
            return {"success": False, "data": None, "error": f"Unable to list questions: {str(e)}"}

    def set_active(self, question_id: str, is_active: bool) -> dict:
        try:
            if not self.questions_model.set_active(question_id, is_active):
                return {"success": False, "data": None, "error": "Question not found"}
            return {"success": True, "data": "Question updated successfully"}
        except Exception as e:
            logger.exception("Error updating question %s", question_id)
            return {"success": False, "data": None, "error": f"Unable to update question: {str(e)}"}
