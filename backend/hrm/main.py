# backend/hrm/main.py
import logging

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import models  # noqa: F401  (registers tables on Base.metadata)
from .candidates import router as candidate_router
from .config import CORS_ORIGINS
from .database import Base, engine
from .errors import register_exception_handlers
from .interviews import router as interview_router
from .logging_config import configure_logging
from .settings import interview_rounds_router, positions_router, skills_router
from .users import router as user_router

configure_logging()
logger = logging.getLogger(__name__)

Base.metadata.create_all(bind=engine)

app = FastAPI(title="HRM API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

api = APIRouter(prefix="/api")


@api.get("/health", tags=["health"])
def health():
    return {"data": {"status": "ok"}}


# --- Include Routers ---
api.include_router(user_router, prefix="/user", tags=["user"])
api.include_router(candidate_router, prefix="/candidate", tags=["candidate"])
api.include_router(skills_router, prefix="/skills", tags=["skills"])
api.include_router(positions_router, prefix="/positions", tags=["positions"])
api.include_router(interview_rounds_router, prefix="/interview-round", tags=["interview-round"])
api.include_router(interview_router, prefix="/interview", tags=["interview"])
app.include_router(api)

logger.info("HRM API ready (%d routes)", len(app.routes))
