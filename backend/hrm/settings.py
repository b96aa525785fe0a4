# backend/hrm/settings.py
"""Settings screens: CRUD for the reference tables (skills, positions, interview rounds).

Names are unique regardless of case, matching how candidate and interview writes look them up.
Deleting a reference row only drops its links; candidates that used it are untouched.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from . import crud, models, schemas
from .database import get_db
from .dependencies import SessionContext, get_current_session
from .errors import Conflict, NotFound
from .pagination import PageParams, page_params, paginate

logger = logging.getLogger(__name__)

skills_router = APIRouter()
positions_router = APIRouter()
interview_rounds_router = APIRouter()


def _get_or_404(db: Session, model, entity_id: int, label: str):
    entity = db.query(model).filter(model.id == entity_id).first()
    if not entity:
        raise NotFound(f"{label} not found")
    return entity


def _ensure_name_free(db: Session, model, name: str, label: str, exclude_id: Optional[int] = None):
    if crud.find_by_name(db, model, name, exclude_id=exclude_id):
        raise Conflict(f"{label} with this name already exists")


def _list(db: Session, model, search: Optional[str], params: PageParams):
    query = db.query(model)
    if search and search.strip():
        query = query.filter(func.lower(model.name).like(f"%{search.strip().lower()}%"))
    return paginate(query.order_by(model.name.asc(), model.id.asc()), params)


def _create(db: Session, model, payload, label: str):
    _ensure_name_free(db, model, payload.name, label)
    entity = model(**payload.model_dump())
    db.add(entity)
    db.commit()
    db.refresh(entity)
    logger.info("Created %s %r (id=%s)", model.__name__, entity.name, entity.id)
    return entity


def _update(db: Session, model, entity_id: int, payload, label: str):
    entity = _get_or_404(db, model, entity_id, label)
    _ensure_name_free(db, model, payload.name, label, exclude_id=entity.id)
    for key, value in payload.model_dump().items():
        setattr(entity, key, value)
    db.commit()
    db.refresh(entity)
    logger.info("Updated %s %s", model.__name__, entity.id)
    return entity


def _delete(db: Session, model, entity_id: int, label: str):
    entity = _get_or_404(db, model, entity_id, label)
    db.delete(entity)
    db.commit()
    logger.info("Deleted %s %s", model.__name__, entity_id)


# --- Skills ---
@skills_router.post("/add-skill", response_model=schemas.DataResponse[schemas.Skill], status_code=status.HTTP_201_CREATED)
def add_skill(
    payload: schemas.SkillIn,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    return {"data": _create(db, models.Skill, payload, "Skill"), "message": "Skill created successfully"}


@skills_router.get("/get-skill", response_model=schemas.PageResponse[schemas.Skill])
def list_skills(
    search: Optional[str] = Query(None),
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    return _list(db, models.Skill, search, params)


@skills_router.get("/get-skills-by-id/{skill_id}", response_model=schemas.DataResponse[schemas.Skill])
def get_skill(
    skill_id: int,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    return {"data": _get_or_404(db, models.Skill, skill_id, "Skill")}


@skills_router.put("/update-skill/{skill_id}", response_model=schemas.DataResponse[schemas.Skill])
def update_skill(
    skill_id: int,
    payload: schemas.SkillIn,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    return {"data": _update(db, models.Skill, skill_id, payload, "Skill"), "message": "Skill updated successfully"}


@skills_router.delete("/delete-skill/{skill_id}", response_model=schemas.MessageResponse)
def delete_skill(
    skill_id: int,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    _delete(db, models.Skill, skill_id, "Skill")
    return {"message": "Skill deleted successfully"}


# --- Positions ---
@positions_router.post(
    "/add-position", response_model=schemas.DataResponse[schemas.Position], status_code=status.HTTP_201_CREATED
)
def add_position(
    payload: schemas.PositionIn,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    return {"data": _create(db, models.Position, payload, "Position"), "message": "Position created successfully"}


@positions_router.get("/get-position", response_model=schemas.PageResponse[schemas.Position])
def list_positions(
    search: Optional[str] = Query(None),
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    return _list(db, models.Position, search, params)


@positions_router.get("/get-positions-by-id/{position_id}", response_model=schemas.DataResponse[schemas.Position])
def get_position(
    position_id: int,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    return {"data": _get_or_404(db, models.Position, position_id, "Position")}


@positions_router.put("/update-position/{position_id}", response_model=schemas.DataResponse[schemas.Position])
def update_position(
    position_id: int,
    payload: schemas.PositionIn,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    entity = _update(db, models.Position, position_id, payload, "Position")
    return {"data": entity, "message": "Position updated successfully"}


@positions_router.delete("/delete-position/{position_id}", response_model=schemas.MessageResponse)
def delete_position(
    position_id: int,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    _delete(db, models.Position, position_id, "Position")
    return {"message": "Position deleted successfully"}


# --- Interview rounds ---
@interview_rounds_router.post(
    "/add-interview-round",
    response_model=schemas.DataResponse[schemas.InterviewRound],
    status_code=status.HTTP_201_CREATED,
)
def add_interview_round(
    payload: schemas.InterviewRoundIn,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    entity = _create(db, models.InterviewRound, payload, "Interview round")
    return {"data": entity, "message": "Interview round created successfully"}


@interview_rounds_router.get("/get-interview-round", response_model=schemas.PageResponse[schemas.InterviewRound])
def list_interview_rounds(
    search: Optional[str] = Query(None),
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    return _list(db, models.InterviewRound, search, params)


@interview_rounds_router.get(
    "/get-interview-round-by-id/{round_id}", response_model=schemas.DataResponse[schemas.InterviewRound]
)
def get_interview_round(
    round_id: int,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    return {"data": _get_or_404(db, models.InterviewRound, round_id, "Interview round")}


@interview_rounds_router.put(
    "/update-interview-round/{round_id}", response_model=schemas.DataResponse[schemas.InterviewRound]
)
def update_interview_round(
    round_id: int,
    payload: schemas.InterviewRoundIn,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    entity = _update(db, models.InterviewRound, round_id, payload, "Interview round")
    return {"data": entity, "message": "Interview round updated successfully"}


@interview_rounds_router.delete("/delete-interview-round/{round_id}", response_model=schemas.MessageResponse)
def delete_interview_round(
    round_id: int,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    _delete(db, models.InterviewRound, round_id, "Interview round")
    return {"message": "Interview round deleted successfully"}
