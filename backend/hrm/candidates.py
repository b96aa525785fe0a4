# backend/hrm/candidates.py
import logging
import os
from typing import List, Optional
from uuid import uuid4

from fastapi import APIRouter, Depends, File, Query, UploadFile, status
from sqlalchemy import func, or_
from sqlalchemy.orm import Session, selectinload
from werkzeug.utils import secure_filename

from . import crud, models, schemas
from .config import MAX_RESUME_BYTES, UPLOAD_DIR
from .database import get_db
from .dependencies import SessionContext, get_current_session
from .errors import Conflict, NotFound, ValidationFailed
from .pagination import PageParams, page_params, paginate

router = APIRouter()

logger = logging.getLogger(__name__)

ALLOWED_RESUME_TYPES = {
    "application/pdf": ".pdf",
    "application/msword": ".doc",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": ".docx",
}


def _candidates_query(db: Session):
    return db.query(models.Candidate).options(
        selectinload(models.Candidate.skills),
        selectinload(models.Candidate.applied_position),
    )


def _get_candidate_or_404(db: Session, candidate_id: int) -> models.Candidate:
    candidate = _candidates_query(db).filter(models.Candidate.id == candidate_id).first()
    if not candidate:
        raise NotFound("Candidate not found")
    return candidate


def _ensure_email_free(db: Session, email: str, exclude_id: Optional[int] = None):
    query = db.query(models.Candidate).filter(func.lower(models.Candidate.email) == email.lower())
    if exclude_id is not None:
        query = query.filter(models.Candidate.id != exclude_id)
    if query.first():
        raise Conflict("Candidate with this email already exists")


def _apply_payload(db: Session, candidate: models.Candidate, payload: schemas.CandidateIn, session: SessionContext):
    data = payload.model_dump(exclude={"skills", "applied_position", "add_by"})
    for key, value in data.items():
        setattr(candidate, key, value)
    candidate.email = str(payload.email).lower()
    candidate.add_by = payload.add_by or candidate.add_by or session.name or session.email

    candidate.skills = [r.entity for r in crud.resolve_skills(db, payload.skills)]
    candidate.applied_position = [r.entity for r in crud.resolve_positions(db, payload.applied_position)]


@router.post(
    "/add-candidate",
    response_model=schemas.DataResponse[schemas.ResumeUpload],
    status_code=status.HTTP_201_CREATED,
)
async def upload_resume(
    resume: UploadFile = File(...),
    session: SessionContext = Depends(get_current_session),
):
    """Store a resume file and return its path for a later add-details call. Nothing is parsed."""
    extension = ALLOWED_RESUME_TYPES.get(resume.content_type or "")
    if extension is None:
        raise ValidationFailed(
            "Validation error", [{"field": "resume", "message": "Resume must be a PDF or Word document"}]
        )
    content = await resume.read()
    if not content:
        raise ValidationFailed("Validation error", [{"field": "resume", "message": "Resume file is required"}])
    if len(content) > MAX_RESUME_BYTES:
        raise ValidationFailed("Validation error", [{"field": "resume", "message": "Resume file is too large"}])

    os.makedirs(UPLOAD_DIR, exist_ok=True)
    safe_name = secure_filename(resume.filename or "") or f"resume{extension}"
    dest_path = os.path.abspath(os.path.join(UPLOAD_DIR, f"{uuid4()}_{safe_name}"))
    with open(dest_path, "wb") as out:
        out.write(content)
    logger.info("Stored resume %s (%d bytes) for %s", dest_path, len(content), session.email)

    return {
        "data": {
            "resume": dest_path,
            "original_filename": resume.filename or safe_name,
            "content_type": resume.content_type,
            "size": len(content),
        },
        "message": "Resume uploaded successfully",
    }


@router.post(
    "/add-details",
    response_model=schemas.DataResponse[schemas.Candidate],
    status_code=status.HTTP_201_CREATED,
)
def add_candidate(
    payload: schemas.CandidateIn,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    _ensure_email_free(db, str(payload.email))

    candidate = models.Candidate()
    db.add(candidate)
    _apply_payload(db, candidate, payload, session)
    db.commit()
    db.refresh(candidate)
    logger.info("Added candidate %s (%s) by %s", candidate.id, candidate.email, candidate.add_by)
    return {"data": candidate, "message": "Candidate added successfully"}


@router.put("/update-candidate/{candidate_id}", response_model=schemas.DataResponse[schemas.Candidate])
def update_candidate(
    candidate_id: int,
    payload: schemas.CandidateIn,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    candidate = _get_candidate_or_404(db, candidate_id)
    _ensure_email_free(db, str(payload.email), exclude_id=candidate.id)

    _apply_payload(db, candidate, payload, session)
    db.commit()
    db.refresh(candidate)
    logger.info("Updated candidate %s", candidate.id)
    return {"data": candidate, "message": "Candidate updated successfully"}


@router.get("/get-candidate/{candidate_id}", response_model=schemas.DataResponse[schemas.Candidate])
def get_candidate(
    candidate_id: int,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    return {"data": _get_candidate_or_404(db, candidate_id)}


@router.delete("/delete-candidate/{candidate_id}", response_model=schemas.MessageResponse)
def delete_candidate(
    candidate_id: int,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    candidate = db.query(models.Candidate).filter(models.Candidate.id == candidate_id).first()
    if not candidate:
        raise NotFound("Candidate not found")
    db.delete(candidate)
    db.commit()
    logger.info("Deleted candidate %s and their interviews", candidate_id)
    return {"message": "Candidate deleted successfully"}


def _split_csv(raw: Optional[str]) -> List[str]:
    return [part.strip().lower() for part in (raw or "").split(",") if part.strip()]


@router.get("/filter", response_model=schemas.PageResponse[schemas.Candidate])
def filter_candidates(
    search: Optional[str] = Query(None, description="Substring of full name or email"),
    skill: Optional[str] = Query(None, description="Comma-separated skill names (any of)"),
    position: Optional[str] = Query(None, description="Comma-separated position names (any of)"),
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    """Skills match if the candidate has any of them; positions likewise; both filters must hold."""
    query = _candidates_query(db)

    if search and search.strip():
        pattern = f"%{search.strip().lower()}%"
        query = query.filter(
            or_(
                func.lower(models.Candidate.full_name).like(pattern),
                func.lower(models.Candidate.email).like(pattern),
            )
        )
    skills = _split_csv(skill)
    if skills:
        query = query.filter(models.Candidate.skills.any(func.lower(models.Skill.name).in_(skills)))
    positions = _split_csv(position)
    if positions:
        query = query.filter(models.Candidate.applied_position.any(func.lower(models.Position.name).in_(positions)))

    query = query.order_by(models.Candidate.created_at.desc(), models.Candidate.id.desc())
    return paginate(query, params)


@router.get("/paginate-searchable", response_model=schemas.PageResponse[schemas.Candidate])
def paginate_searchable_candidates(
    search: Optional[str] = Query(None, description="Substring of full name"),
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    query = _candidates_query(db)
    if search and search.strip():
        query = query.filter(func.lower(models.Candidate.full_name).like(f"%{search.strip().lower()}%"))
    query = query.order_by(models.Candidate.full_name.asc(), models.Candidate.id.asc())
    return paginate(query, params)
