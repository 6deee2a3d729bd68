from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from quizdesk.helpers.Config import get_cors_origins


def add_cors_middleware(app: FastAPI) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
