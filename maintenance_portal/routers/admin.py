from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import select
from ..database import get_session
from ..perf_logic import summarize_tasks
from .. import models, schemas

router = APIRouter(prefix="/admin", tags=["admin"])

@router.get("/summary", response_model=schemas.AdminSummaryResponse)
def admin_summary(session: Session = Depends(get_session)):
    tasks = session.scalars(select(models.Task)).all()
    summary = summarize_tasks(tasks)
    return schemas.AdminSummaryResponse(resolved=summary.resolved, pending=summary.pending)
