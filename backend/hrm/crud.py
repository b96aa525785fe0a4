# backend/hrm/crud.py
import enum
import logging
from typing import Iterable, List, NamedTuple, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from . import models

logger = logging.getLogger(__name__)


# --- Users ---
def get_user_by_email(db: Session, email: str) -> Optional[models.User]:
    return db.query(models.User).filter(func.lower(models.User.email) == email.strip().lower()).first()


# --- Reference entities (Skill / Position / InterviewRound) ---
class Resolution(str, enum.Enum):
    FOUND = "found"
    CREATED = "created"


class Resolved(NamedTuple):
    entity: object
    outcome: Resolution

    @property
    def created(self) -> bool:
        return self.outcome is Resolution.CREATED


# Defaults used when a name arrives that no reference row has yet
_IMPLICIT_DEFAULTS = {
    models.Skill: {"category": "General"},
    models.Position: {"department": "General", "level": models.PositionLevel.JUNIOR},
    models.InterviewRound: {"description": "General"},
}


def _normalized(name: str) -> str:
    return name.strip().lower()


def find_by_name(db: Session, model, name: str, exclude_id: Optional[int] = None):
    """Case-insensitive, whitespace-insensitive lookup; the single matching rule for reference names."""
    query = db.query(model).filter(func.lower(func.trim(model.name)) == _normalized(name))
    if exclude_id is not None:
        query = query.filter(model.id != exclude_id)
    return query.order_by(model.id).first()


def resolve_or_create(db: Session, model, name: str) -> Resolved:
    """Return the reference row named ``name``, creating it with defaults when absent.

    The new row is only flushed; committing stays with the caller's unit of work.
    """
    existing = find_by_name(db, model, name)
    if existing is not None:
        return Resolved(existing, Resolution.FOUND)

    entity = model(name=name.strip(), **_IMPLICIT_DEFAULTS[model])
    db.add(entity)
    db.flush()
    logger.info("Implicitly created %s %r (id=%s)", model.__name__, entity.name, entity.id)
    return Resolved(entity, Resolution.CREATED)


def resolve_many(db: Session, model, names: Iterable[str]) -> List[Resolved]:
    """Resolve a list of names, collapsing duplicates that differ only in case or padding."""
    seen = set()
    results = []
    for name in names:
        key = _normalized(name)
        if not key or key in seen:
            continue
        seen.add(key)
        results.append(resolve_or_create(db, model, name))
    return results


def resolve_skills(db: Session, names: Iterable[str]) -> List[Resolved]:
    return resolve_many(db, models.Skill, names)


def resolve_positions(db: Session, names: Iterable[str]) -> List[Resolved]:
    return resolve_many(db, models.Position, names)


def resolve_interview_round(db: Session, name: str) -> Resolved:
    return resolve_or_create(db, models.InterviewRound, name)
