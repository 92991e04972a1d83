from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from preppal.application.admin.reference_usecase import (
    ReferenceDataError,
    dashboard_counts,
    load_reference_data,
    resolve_cascade,
)
from preppal.application.filters.cascading_filter import FilterMode
from preppal.infrastructure.auth import AuthSession
from preppal.presentation.dependencies import get_db, require_session
from preppal.presentation.schemas.reference_schema import CascadeOut, DashboardCounts, ReferenceData

router = APIRouter(tags=["Reference Data"])


@router.get("/reference-data", response_model=ReferenceData)
def reference_data(
    include_books: bool = False,
    db: Session = Depends(get_db),
    session: AuthSession = Depends(require_session),
):
    try:
        return load_reference_data(db, include_books=include_books)
    except ReferenceDataError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/reference-data/cascade", response_model=CascadeOut)
def cascade(
    exam_id: str = "",
    subject_id: str = "",
    chapter_id: str = "",
    mode: FilterMode = FilterMode.LOOSE,
    db: Session = Depends(get_db),
    session: AuthSession = Depends(require_session),
):
    try:
        return resolve_cascade(db, exam_id, subject_id, chapter_id, mode)
    except ReferenceDataError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/dashboard/counts", response_model=DashboardCounts)
def counts(db: Session = Depends(get_db), session: AuthSession = Depends(require_session)):
    try:
        return dashboard_counts(db)
    except ReferenceDataError as e:
        raise HTTPException(status_code=500, detail=str(e))
