from datetime import datetime
from typing import List, Optional

from bson import ObjectId
from pymongo import DESCENDING

from quizdesk.helpers.Config import get_db_name
from quizdesk.helpers.Database import MongoDB
from quizdesk.schemas.Submissions import Submission


class SubmissionsModel:
    def __init__(self, db_name: Optional[str] = None, collection_name: str = "submissions"):
        self.collection = MongoDB.get_database(db_name or get_db_name())[collection_name]

    def create_submission(self, data: dict) -> ObjectId:
        data["submittedAt"] = datetime.utcnow()
        result = self.collection.insert_one(data)
        return result.inserted_id

    def get_submission(self, submission_id: str) -> Optional[dict]:
        return self.collection.find_one({"_id": ObjectId(submission_id)})

    def list_submissions(self, filters: dict = None) -> List[dict]:
        cursor = self.collection.find(filters or {}).sort("submittedAt", DESCENDING)
        return list(cursor)

    def get_all_submissions(self) -> List[Submission]:
        return [Submission(**document) for document in self.collection.find({})]

    def find_by_number(self, number: str) -> Optional[Submission]:
        document = self.collection.find_one({"number": number})
        if document:
            return Submission(**document)
        return None

    def watch(self):
        return self.collection.watch(full_document="updateLookup")
