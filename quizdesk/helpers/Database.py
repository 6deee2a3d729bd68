from pymongo import MongoClient, ASCENDING, DESCENDING
from pymongo.errors import ConnectionFailure, OperationFailure
import logging
import os
import certifi

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


class MongoDB:
    client: MongoClient = None

    @classmethod
    def connect(cls, uri: str):
        if cls.client is not None:
            return
        cls.client = MongoClient(uri, tlsCAFile=certifi.where())
        logger.info("MongoDB client initialised")

    @classmethod
    def get_database(cls, db_name: str):
        if cls.client is None:
            raise RuntimeError("MongoDB is not connected")
        return cls.client[db_name]

    @classmethod
    def connection_status(cls):
        try:
            cls.client.admin.command('ping')
            return {"status": "connected", "db": os.getenv('DB_NAME')}
        except ConnectionFailure:
            return {"status": "disconnected", "db": os.getenv('DB_NAME')}

    @classmethod
    def ensure_indexes(cls, db_name: str):
        """
        Indexes the application relies on. The unique answers index is what
        keeps one answer per phone number per question under concurrent submits.
        """
        database = cls.get_database(db_name)
        try:
            database["answers"].create_index(
                [("questionId", ASCENDING), ("phoneNumber", ASCENDING)],
                unique=True,
                name="uniq_question_phone",
            )
        except OperationFailure as e:
            # Existing duplicate answers block the build; submits fall back
            # to the pre-insert check until they are cleaned up.
            logger.error("Could not create unique answers index: %s", e)
        database["answers"].create_index([("submittedAt", DESCENDING)])
        database["submissions"].create_index([("submittedAt", DESCENDING)])
        database["submissions"].create_index([("number", ASCENDING)])
        database["questions"].create_index([("isActive", ASCENDING), ("createdAt", DESCENDING)])
        database["quizSessions"].create_index([("step", ASCENDING), ("lastTickAt", ASCENDING)])

    @classmethod
    def close(cls):
        if cls.client is not None:
            cls.client.close()
            cls.client = None
