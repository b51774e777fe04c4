from typing import Literal

import pandas as pd
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from sqlalchemy import select, or_
from ..database import get_session
from ..perf_logic import compute_tech_stats, build_performance_frame
from ..formatters import display_value, status_label, stats_row
from .. import models, schemas

router = APIRouter(prefix="/technicians", tags=["technicians"])

def _get_technician(session: Session, technician_id: str) -> models.Technician:
    tech = session.get(models.Technician, technician_id)
    if not tech:
        raise HTTPException(status_code=404, detail="Technician not found")
    return tech

def _opt_int(val):
    return None if pd.isna(val) else int(val)

@router.post("/",response_model=schemas.Technician, status_code=201)
def create_technician(payload: schemas.TechnicianCreate, session: Session = Depends(get_session)):
    clash = session.scalar(
        select(models.Technician).where(
            or_(models.Technician.id == payload.id, models.Technician.username == payload.username)
        )
    )
    if clash:
        raise HTTPException(status_code=409, detail="Technician already exists")
    tech = models.Technician(**payload.model_dump())
    session.add(tech)
    session.flush()
    return tech

@router.get("/", response_model=list[schemas.Technician])
def list_technicians(session: Session = Depends(get_session)):
    return session.scalars(select(models.Technician).order_by(models.Technician.id)).all()

@router.post("/tasks", response_model=schemas.Task, status_code=201)
def create_task(payload: schemas.TaskCreate, session: Session = Depends(get_session)):
    _get_technician(session, payload.technician_id)

    task = models.Task(**payload.model_dump())
    session.add(task)
    session.flush()  # obtener id
    return task

@router.get("/performance", response_model=list[schemas.TechnicianStatsResponse])
def performance_overview(sort: Literal["directory", "score"] = "directory", session: Session = Depends(get_session)):
    technicians = session.scalars(select(models.Technician).order_by(models.Technician.id)).all()
    tasks = session.scalars(select(models.Task)).all()
    df_result, _ = build_performance_frame(technicians, tasks, sort_by_score=(sort == "score"))

    return [
        schemas.TechnicianStatsResponse(
            technician_id=r["technician_id"],
            display_name=r["display_name"],
            specialization=r["specialization"] or None,
            total=int(r["total"]),
            resolved_count=int(r["resolved"]),
            pending=int(r["pending"]),
            response_avg=_opt_int(r["avg_response_min"]),
            resolution_avg=_opt_int(r["avg_resolution_min"]),
            score=int(r["score"]),
        )
        for r in df_result.to_dict("records")
    ]

@router.get("/{technician_id}", response_model=schemas.Technician)
def get_technician(technician_id: str, session: Session = Depends(get_session)):
    return _get_technician(session, technician_id)

@router.get("/{technician_id}/tasks", response_model=list[schemas.Task])
def list_technician_tasks(technician_id: str, session: Session = Depends(get_session)):
    _get_technician(session, technician_id)
    stmt = select(models.Task).where(models.Task.technician_id == technician_id).order_by(models.Task.id)
    return session.scalars(stmt).all()

@router.get("/{technician_id}/stats", response_model=schemas.TechnicianStatsResponse)
def technician_stats(technician_id: str, session: Session = Depends(get_session)):
    tech = _get_technician(session, technician_id)
    tasks = session.scalars(select(models.Task)).all()
    stats = compute_tech_stats(tech.id, tasks)
    return schemas.TechnicianStatsResponse(
        technician_id=tech.id,
        display_name=tech.display_name,
        specialization=tech.specialization,
        **stats.to_dict(),
    )

@router.get("/{technician_id}/dashboard", response_model=schemas.TechnicianDashboard)
def technician_dashboard(technician_id: str, session: Session = Depends(get_session)):
    """Tareas y métricas del técnico, con etiquetas y '-' donde falta el dato."""
    tech = _get_technician(session, technician_id)
    tasks = session.scalars(select(models.Task).order_by(models.Task.id)).all()
    stats = compute_tech_stats(tech.id, tasks)

    rows = [
        schemas.TaskRow(
            id=t.id,
            title=t.title,
            building=t.building,
            status=status_label(t.status),
            response_minutes=display_value(t.response_minutes),
            resolution_minutes=display_value(t.resolution_minutes),
            sla_minutes=display_value(t.sla_minutes),
        )
        for t in tasks
        if t.technician_id == tech.id
    ]
    return schemas.TechnicianDashboard(
        technician=schemas.Technician.model_validate(tech),
        tasks=rows,
        metrics=stats_row(stats),
    )
