# backend/hrm/interviews.py
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from . import models, schemas, scheduling
from .database import get_db
from .date_ranges import resolve_date_range
from .dependencies import SessionContext, get_current_session
from .errors import ValidationFailed
from .pagination import PageParams, page_params, paginate

router = APIRouter()


def _split_csv(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]


def _parse_statuses(raw: Optional[str]) -> List[models.InterviewStatus]:
    statuses = []
    for value in _split_csv(raw):
        try:
            statuses.append(models.InterviewStatus(value.lower()))
        except ValueError:
            allowed = ", ".join(s.value for s in models.InterviewStatus)
            raise ValidationFailed(
                "Invalid filters", [{"field": "status", "message": f"Unknown status '{value}'. Expected one of: {allowed}"}]
            )
    return statuses


def interview_filter_params(
    search: Optional[str] = Query(None),
    status: Optional[str] = Query(None, description="Comma-separated statuses, e.g. pending,passed"),
    round: Optional[str] = Query(None, description="Comma-separated interview round names"),
    date_range: Optional[str] = Query(
        None,
        alias="dateRange",
        description="today | yesterday | last-week | last-month | last-quarter | last-year | custom",
    ),
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
) -> scheduling.InterviewFilter:
    if date_range:
        date_from, date_to = resolve_date_range(date_range, start_date, end_date)
    else:
        date_from, date_to = start_date, end_date

    return scheduling.InterviewFilter(
        search=search.strip() if search and search.strip() else None,
        statuses=_parse_statuses(status),
        rounds=_split_csv(round),
        date_from=date_from,
        date_to=date_to,
    )


@router.post(
    "/add-interview",
    response_model=schemas.DataResponse[schemas.Interview],
    status_code=status.HTTP_201_CREATED,
)
def add_interview(
    payload: schemas.InterviewIn,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    interview = scheduling.schedule_interview(db, payload)
    return {"data": interview, "message": "Interview scheduled successfully"}


@router.get("/get-interview", response_model=schemas.PageResponse[schemas.Interview])
def list_interviews(
    search: Optional[str] = Query(None),
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    """All interviews ordered by date then start time, candidate and review embedded."""
    query = scheduling.interviews_query(db)
    if search and search.strip():
        pattern = f"%{search.strip().lower()}%"
        query = query.filter(
            or_(
                func.lower(models.Candidate.full_name).like(pattern),
                func.lower(models.Interview.interviewer).like(pattern),
                func.lower(models.Interview.interview_round).like(pattern),
            )
        )
    return paginate(query, params)


@router.get("/get-interview/{interview_id}", response_model=schemas.DataResponse[schemas.Interview])
def get_interview(
    interview_id: int,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    return {"data": scheduling.get_interview_or_404(db, interview_id)}


@router.get(
    "/get-interview-by-candidate-id/{candidate_id}",
    response_model=schemas.DataResponse[List[schemas.Interview]],
)
def get_interviews_by_candidate(
    candidate_id: int,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    return {"data": scheduling.interviews_for_candidate(db, candidate_id)}


@router.put("/update-interview/{interview_id}", response_model=schemas.DataResponse[schemas.Interview])
def update_interview(
    interview_id: int,
    payload: schemas.InterviewIn,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    interview = scheduling.update_interview(db, interview_id, payload)
    return {"data": interview, "message": "Interview updated successfully"}


@router.delete("/delete-interview/{interview_id}", response_model=schemas.MessageResponse)
def delete_interview(
    interview_id: int,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    scheduling.delete_interview(db, interview_id)
    return {"message": "Interview deleted successfully"}


@router.get("/interview-filter", response_model=schemas.PageResponse[schemas.Interview])
def interview_filter(
    session: SessionContext = Depends(get_current_session),
    filters: scheduling.InterviewFilter = Depends(interview_filter_params),
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
):
    """Search, status, round and date-range filters, ANDed together."""
    return paginate(scheduling.filter_interviews(db, filters), params)
