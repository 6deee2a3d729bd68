from datetime import datetime

import mongomock
import pytest
from fastapi.testclient import TestClient

from quizdesk.dependencies import cleanup_resources
from quizdesk.helpers.Database import MongoDB
from quizdesk.helpers.Utilities import Utils

ADMIN_EMAIL = "admin@example.com"
TEST_DB = "quizdesk_test"


@pytest.fixture(autouse=True)
def environment(monkeypatch):
    monkeypatch.setenv("DB_NAME", TEST_DB)
    monkeypatch.setenv("JWT_SECRET", "test-secret")
    monkeypatch.setenv("ADMIN_EMAILS", f"{ADMIN_EMAIL}, second-admin@example.com")
    monkeypatch.setenv("QUIZ_DURATION_SECONDS", "1500")


@pytest.fixture(autouse=True)
def mongo(environment):
    MongoDB.client = mongomock.MongoClient()
    MongoDB.ensure_indexes(TEST_DB)
    cleanup_resources()
    yield MongoDB.get_database(TEST_DB)
    cleanup_resources()
    MongoDB.client = None


@pytest.fixture
def client():
    from quizdesk.main import app
    return TestClient(app)


@pytest.fixture
def admin_headers():
    token = Utils.create_jwt_token({"email": ADMIN_EMAIL, "uid": "admin-uid"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers():
    token = Utils.create_jwt_token({"email": "someone@example.com", "uid": "user-uid"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def seed_questions(mongo):
    def _seed(count=4):
        documents = [
            {
                "questionText": f"Question {index}?",
                "options": [f"q{index}-a", f"q{index}-b", f"q{index}-c", f"q{index}-d"],
                "correctAnswer": f"q{index}-a",
                "createdAt": datetime(2026, 1, 1, 9, index),
                "isActive": True,
            }
            for index in range(count)
        ]
        result = mongo["questions"].insert_many(documents)
        return [str(inserted_id) for inserted_id in result.inserted_ids]
    return _seed
