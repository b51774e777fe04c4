"""Datos de demostración del portal: dos técnicos y tres tareas."""
import logging

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from . import models

logger = logging.getLogger(__name__)

DEMO_TECHNICIANS = [
    {
        "id": "tech1",
        "username": "tech1",
        "display_name": "Technician 1",
        "specialization": "Lifts & Electrical",
    },
    {
        "id": "tech2",
        "username": "tech2",
        "display_name": "Technician 2",
        "specialization": "Plumbing & Civil",
    },
]

DEMO_TASKS = [
    {
        "id": 1,
        "title": "Lift not working – BSN Block",
        "building": "BSN Block",
        "category": "electricity",
        "status": "in_progress",
        "technician_id": "tech1",
        "response_minutes": 7,
        "resolution_minutes": None,
        "sla_minutes": 30,
    },
    {
        "id": 2,
        "title": "Lift inspection pending – Lab Block",
        "building": "Lab Block",
        "category": "electricity",
        "status": "pending",
        "technician_id": "tech2",
        "response_minutes": None,
        "resolution_minutes": None,
        "sla_minutes": 30,
    },
    {
        "id": 3,
        "title": "Water leakage – Hostel A (2nd Floor)",
        "building": "Hostel A",
        "category": "water",
        "status": "resolved",
        "technician_id": "tech1",
        "response_minutes": 10,
        "resolution_minutes": 45,
        "sla_minutes": 60,
    },
]


def seed_demo_data(session: Session) -> bool:
    """Carga los datos demo si el directorio de técnicos está vacío."""
    count = session.scalar(select(func.count()).select_from(models.Technician))
    if count:
        return False

    session.add_all(models.Technician(**t) for t in DEMO_TECHNICIANS)
    session.flush()
    session.add_all(models.Task(**t) for t in DEMO_TASKS)
    session.flush()
    logger.info("Datos demo cargados: %d técnicos, %d tareas", len(DEMO_TECHNICIANS), len(DEMO_TASKS))
    return True
