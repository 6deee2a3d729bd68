from datetime import datetime
from typing import List, Optional

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING

from quizdesk.helpers.Config import get_db_name
from quizdesk.helpers.Database import MongoDB
from quizdesk.schemas.Answers import Answer


class AnswersModel:
    def __init__(self, db_name: Optional[str] = None, collection_name: str = "answers"):
        self.collection = MongoDB.get_database(db_name or get_db_name())[collection_name]

    def create_answer(self, data: dict) -> ObjectId:
        """
        Raises DuplicateKeyError when the phone number already answered the question.
        """
        data["submittedAt"] = datetime.utcnow()
        data.setdefault("isCorrect", False)
        data.setdefault("points", 0)
        result = self.collection.insert_one(data)
        return result.inserted_id

    def exists(self, question_id: str, phone_number: str) -> bool:
        document = self.collection.find_one(
            {"questionId": question_id, "phoneNumber": phone_number}, {"_id": 1}
        )
        return document is not None

    def find_by_phone(self, phone_number: str) -> Optional[Answer]:
        document = self.collection.find_one({"phoneNumber": phone_number})
        if document:
            return Answer(**document)
        return None

    def get_answer(self, answer_id: str) -> Optional[dict]:
        return self.collection.find_one({"_id": ObjectId(answer_id)})

    def list_answers(self, filters: dict = None) -> List[dict]:
        cursor = self.collection.find(filters or {}).sort("submittedAt", DESCENDING)
        return list(cursor)

    def mark_correct(self, answer_id: str) -> Optional[dict]:
        self.collection.update_one(
            {"_id": ObjectId(answer_id)},
            {"$set": {"isCorrect": True}}
        )
        return self.get_answer(answer_id)

    def correct_answers_in_order(self, question_id: str) -> List[dict]:
        cursor = self.collection.find(
            {"questionId": question_id, "isCorrect": True}
        ).sort("submittedAt", ASCENDING)
        return list(cursor)

    def set_points(self, answer_id, points: int) -> bool:
        result = self.collection.update_one(
            {"_id": ObjectId(answer_id)},
            {"$set": {"points": points}}
        )
        return result.modified_count > 0

    def points_by_phone(self) -> List[dict]:
        pipeline = [
            {"$sort": {"submittedAt": 1}},
            {"$group": {
                "_id": "$phoneNumber",
                "name": {"$first": "$name"},
                "totalPoints": {"$sum": "$points"},
                "answersCount": {"$sum": 1},
            }},
            {"$sort": {"totalPoints": -1}},
        ]
        return list(self.collection.aggregate(pipeline))

    def watch(self):
        return self.collection.watch(full_document="updateLookup")
