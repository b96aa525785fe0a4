# backend/hrm/users.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from . import crud, models, schemas, security
from .database import get_db
from .dependencies import SessionContext, get_current_session, require_admin
from .errors import Conflict, NotFound, Unauthorized
from .pagination import PageParams, page_params, paginate

router = APIRouter()

logger = logging.getLogger(__name__)


def _get_user_or_404(db: Session, user_id: int) -> models.User:
    user = db.query(models.User).filter(models.User.id == user_id).first()
    if not user:
        raise NotFound("User not found")
    return user


@router.post("/login", response_model=schemas.DataResponse[schemas.Token])
def login(payload: schemas.LoginRequest, db: Session = Depends(get_db)):
    user = crud.get_user_by_email(db, str(payload.email))
    if user is None:
        logger.warning("Login attempt for unknown email %s", payload.email)
        raise NotFound("User not found")
    if not security.verify_password(payload.password, user.hashed_password):
        logger.warning("Invalid password for %s", user.email)
        raise Unauthorized("Invalid credentials")

    token = security.create_access_token(user)
    logger.info("User %s logged in", user.email)
    return {"data": {"token": token, "token_type": "bearer"}, "message": "Login successful"}


@router.get("/profile", response_model=schemas.DataResponse[schemas.Profile])
def profile(session: SessionContext = Depends(get_current_session)):
    """Claims of the current token; the frontend hydrates its session store from this."""
    return {
        "data": {"user_id": session.user_id, "email": session.email, "role": session.role, "name": session.name}
    }


@router.post("/create-user", response_model=schemas.DataResponse[schemas.User], status_code=status.HTTP_201_CREATED)
def create_user(
    payload: schemas.UserCreate,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(require_admin),
):
    if crud.get_user_by_email(db, str(payload.email)):
        raise Conflict("User already exists")

    user = models.User(
        name=payload.name,
        phone=payload.phone,
        email=str(payload.email).lower(),
        hashed_password=security.hash_password(payload.password),
        role=payload.role,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("User %s created by %s", user.email, session.email)
    return {"data": user, "message": "User created successfully"}


@router.get("/get-user", response_model=schemas.PageResponse[schemas.User])
def list_users(
    search: Optional[str] = Query(None, description="Substring of the user's name"),
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    query = db.query(models.User)
    if search and search.strip():
        query = query.filter(func.lower(models.User.name).like(f"%{search.strip().lower()}%"))
    return paginate(query.order_by(models.User.name.asc(), models.User.id.asc()), params)


@router.put("/update-user/{user_id}", response_model=schemas.DataResponse[schemas.User])
def update_user(
    user_id: int,
    payload: schemas.UserUpdate,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(require_admin),
):
    user = _get_user_or_404(db, user_id)
    email = str(payload.email).lower()
    if email != user.email.lower():
        existing = crud.get_user_by_email(db, email)
        if existing and existing.id != user.id:
            raise Conflict("Email already exists")

    user.name = payload.name
    user.email = email
    user.phone = payload.phone
    user.role = payload.role
    db.commit()
    db.refresh(user)
    logger.info("User %s updated by %s", user.id, session.email)
    return {"data": user, "message": "User updated successfully"}


@router.delete("/delete-user/{user_id}", response_model=schemas.MessageResponse)
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(require_admin),
):
    user = _get_user_or_404(db, user_id)
    db.delete(user)
    db.commit()
    logger.info("User %s deleted by %s", user_id, session.email)
    return {"message": "User deleted successfully"}
