# backend/hrm/scheduling.py
"""Interview lifecycle: scheduling, full-record updates with review attachment, and querying.

An interview is created ``pending``; its status afterwards is whatever the caller sends
(the pass/fail threshold on the review score is applied client-side).
"""
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Query, Session, joinedload

from . import crud, models, schemas
from .errors import Conflict, NotFound
from .time_format import parse_12_hour

logger = logging.getLogger(__name__)


@dataclass
class InterviewFilter:
    search: Optional[str] = None
    statuses: List[models.InterviewStatus] = field(default_factory=list)
    rounds: List[str] = field(default_factory=list)
    date_from: Optional[date] = None
    date_to: Optional[date] = None


def _get_candidate_or_404(db: Session, candidate_id: int) -> models.Candidate:
    candidate = db.query(models.Candidate).filter(models.Candidate.id == candidate_id).first()
    if not candidate:
        raise NotFound("Candidate not found")
    return candidate


def get_interview_or_404(db: Session, interview_id: int) -> models.Interview:
    interview = (
        db.query(models.Interview)
        .options(joinedload(models.Interview.candidate), joinedload(models.Interview.review))
        .filter(models.Interview.id == interview_id)
        .first()
    )
    if not interview:
        raise NotFound("Interview not found")
    return interview


def find_slot(db: Session, candidate_id: int, on: date, start_time, end_time) -> Optional[models.Interview]:
    return (
        db.query(models.Interview)
        .filter(
            models.Interview.candidate_id == candidate_id,
            models.Interview.date == on,
            models.Interview.start_time == start_time,
            models.Interview.end_time == end_time,
        )
        .first()
    )


def schedule_interview(db: Session, payload: schemas.InterviewIn) -> models.Interview:
    """Create an interview after the candidate and double-booking checks.

    The slot check is a plain read before the insert, so two simultaneous requests for
    the same slot can both succeed.
    """
    candidate = _get_candidate_or_404(db, payload.candidate_id)

    start_time = parse_12_hour(payload.start_time)
    end_time = parse_12_hour(payload.end_time)
    if find_slot(db, candidate.id, payload.date, start_time, end_time):
        logger.warning(
            "Rejected double booking for candidate %s on %s %s-%s", candidate.id, payload.date, start_time, end_time
        )
        raise Conflict("Interview already scheduled")

    round_name = crud.resolve_interview_round(db, payload.interview_round).entity.name

    interview = models.Interview(
        interviewer=payload.interviewer,
        candidate=candidate,
        date=payload.date,
        start_time=start_time,
        end_time=end_time,
        interview_round=round_name,
        status=payload.status,
        meeting_link=payload.meeting_link,
    )
    if payload.review is not None:
        interview.review = models.Review(score=payload.review.score, feedback=payload.review.feedback)

    db.add(interview)
    db.commit()
    db.refresh(interview)
    logger.info("Scheduled interview %s for candidate %s on %s at %s", interview.id, candidate.id, interview.date, start_time)
    return interview


def update_interview(db: Session, interview_id: int, payload: schemas.InterviewIn) -> models.Interview:
    """Replace every field of an interview; a review in the payload becomes a new Review row."""
    candidate = _get_candidate_or_404(db, payload.candidate_id)
    interview = get_interview_or_404(db, interview_id)

    round_name = crud.resolve_interview_round(db, payload.interview_round).entity.name

    if payload.review is not None:
        # The superseded review is an orphan now and gets deleted with this flush
        interview.review = models.Review(score=payload.review.score, feedback=payload.review.feedback)

    interview.interviewer = payload.interviewer
    interview.candidate = candidate
    interview.date = payload.date
    interview.start_time = parse_12_hour(payload.start_time)
    interview.end_time = parse_12_hour(payload.end_time)
    interview.interview_round = round_name
    interview.status = payload.status
    interview.meeting_link = payload.meeting_link

    db.commit()
    db.refresh(interview)
    logger.info("Updated interview %s (status=%s)", interview.id, interview.status.value)
    return interview


def delete_interview(db: Session, interview_id: int) -> None:
    interview = db.query(models.Interview).filter(models.Interview.id == interview_id).first()
    if not interview:
        raise NotFound("Interview not found")
    db.delete(interview)
    db.commit()
    logger.info("Deleted interview %s", interview_id)


def interviews_query(db: Session) -> Query:
    return (
        db.query(models.Interview)
        .join(models.Interview.candidate)
        .options(joinedload(models.Interview.candidate), joinedload(models.Interview.review))
        .order_by(models.Interview.date.asc(), models.Interview.start_time.asc(), models.Interview.id.asc())
    )


def interviews_for_candidate(db: Session, candidate_id: int) -> List[models.Interview]:
    _get_candidate_or_404(db, candidate_id)
    return interviews_query(db).filter(models.Interview.candidate_id == candidate_id).all()


def filter_interviews(db: Session, filters: InterviewFilter) -> Query:
    query = interviews_query(db)

    if filters.search:
        pattern = f"%{filters.search.strip().lower()}%"
        query = query.filter(
            or_(
                func.lower(models.Candidate.full_name).like(pattern),
                func.lower(models.Candidate.email).like(pattern),
                models.Candidate.phone.like(pattern),
            )
        )
    if filters.statuses:
        query = query.filter(models.Interview.status.in_(filters.statuses))
    if filters.rounds:
        query = query.filter(func.trim(models.Interview.interview_round).in_(filters.rounds))
    if filters.date_from is not None:
        query = query.filter(models.Interview.date >= filters.date_from)
    if filters.date_to is not None:
        query = query.filter(models.Interview.date <= filters.date_to)

    return query
