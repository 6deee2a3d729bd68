import logging
import os

from apscheduler.schedulers.background import BackgroundScheduler
from dotenv import load_dotenv
from fastapi import FastAPI

from quizdesk.controllers import Auth, Dashboard, Intake, Leaderboard, Questions, QuizFlow
from quizdesk.dependencies import cleanup_resources, get_quiz_flow_service
from quizdesk.helpers.Config import get_db_name, get_session_sweep_minutes
from quizdesk.helpers.Database import MongoDB
from quizdesk.helpers.Logger import configure_logging
from quizdesk.middleware.Cors import add_cors_middleware
from quizdesk.middleware.GlobalErrorHandling import GlobalErrorHandlingMiddleware

load_dotenv()
configure_logging()

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Quizdesk",
    description="Quizdesk - Question of the day, timed quizzes and leaderboards",
    version="1.0.0",
    docs_url="/api-docs",
    redoc_url="/api-redoc",
)

# Middleware
app.add_middleware(GlobalErrorHandlingMiddleware)
add_cors_middleware(app)

app.include_router(Questions.router)
app.include_router(Intake.router)
app.include_router(QuizFlow.router)
app.include_router(Leaderboard.router)
app.include_router(Auth.router)
app.include_router(Dashboard.router)

scheduler = BackgroundScheduler(job_defaults={"coalesce": True, "max_instances": 1})


def run_session_sweep_job() -> None:
    try:
        completed = get_quiz_flow_service().sweep_expired()
        logger.debug("[SessionSweep] completed=%s", completed)
    except Exception:  # pylint: disable=broad-except
        logger.exception("[SessionSweep] failed")


@app.on_event("startup")
def startup_event():
    connection_string = os.getenv("MONGODB_CONNECTION_STRING")
    MongoDB.connect(connection_string)
    MongoDB.ensure_indexes(get_db_name())
    logger.info("MongoDB connected")

    scheduler.add_job(
        run_session_sweep_job,
        trigger="interval",
        minutes=get_session_sweep_minutes(),
        id="quiz_session_sweep",
        replace_existing=True,
    )
    scheduler.start()
    logger.info("Quiz session sweep scheduled every %s minute(s)", get_session_sweep_minutes())


@app.on_event("shutdown")
def shutdown_event():
    logger.info("Shutting down Quizdesk...")
    if scheduler.running:
        scheduler.shutdown(wait=False)
    cleanup_resources()


@app.get("/")
def root():
    return {
        "service": "Quizdesk",
        "status": "running",
        "description": "Quiz submissions, timed quizzes and leaderboards",
    }


@app.get("/health")
def health_check():
    """Health check endpoint to verify the server is running"""
    db_status = MongoDB.connection_status()
    return {
        "status": "healthy",
        "database": db_status,
        "service": "Quizdesk",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("quizdesk.main:app", host="0.0.0.0", port=3003, reload=True)
