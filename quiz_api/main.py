import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from quiz_api.routes import questions, user
from quiz_api.db.base import Base
from quiz_api.db.sessions import engine
from quiz_api.core.config import settings
from quiz_api.repositories.question_repository import question_repository_scope
from quiz_api.services.seed import seed_sample_questions

# Import all models to ensure they're registered with Base
import quiz_api.models

logger = logging.getLogger("quiz_api")

# Create tables
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Quiz question store gated by host authentication and group membership"
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(user.router)
app.include_router(questions.router)


@app.on_event("startup")
def startup_event():
    logger.info("%s v%s starting...", settings.APP_NAME, settings.APP_VERSION)
    logger.info(
        "Store backend: %s, membership backend: %s, contributor group: %s",
        settings.STORE_BACKEND,
        settings.MEMBERSHIP_BACKEND,
        settings.CONTRIBUTOR_GROUP,
    )
    if settings.SEED_SAMPLE_DATA:
        with question_repository_scope() as repository:
            seed_sample_questions(repository)


@app.get("/health")
def health():
    return {"status": "ok"}
