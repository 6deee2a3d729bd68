from datetime import datetime
from typing import List, Optional

from bson import ObjectId
from pymongo import DESCENDING

from quizdesk.helpers.Config import get_db_name
from quizdesk.helpers.Database import MongoDB
from quizdesk.schemas.Questions import Question


class QuestionsModel:
    def __init__(self, db_name: Optional[str] = None, collection_name: str = "questions"):
        self.collection = MongoDB.get_database(db_name or get_db_name())[collection_name]

    def create_question(self, data: dict) -> ObjectId:
        data["createdAt"] = datetime.utcnow()
        data["isActive"] = True
        result = self.collection.insert_one(data)
        return result.inserted_id

    def get_active_question(self) -> Optional[Question]:
        """
        Most recently created question flagged active.
        """
        cursor = self.collection.find({"isActive": True}).sort("createdAt", DESCENDING).limit(1)
        for document in cursor:
            return Question(**document)
        return None

    def list_questions(self, filters: dict = None, skip: int = 0, limit: int = 0) -> List[Question]:
        cursor = self.collection.find(filters or {}).sort("createdAt", DESCENDING).skip(skip)
        if limit:
            cursor = cursor.limit(limit)
        return [Question(**document) for document in cursor]

    def get_all_questions(self) -> List[Question]:
        return [Question(**document) for document in self.collection.find({})]

    def set_active(self, question_id: str, is_active: bool) -> bool:
        result = self.collection.update_one(
            {"_id": ObjectId(question_id)},
            {"$set": {"isActive": is_active}}
        )
        return result.matched_count > 0
