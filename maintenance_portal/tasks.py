# maintenance_portal/tasks.py
import logging
from pathlib import Path
from celery.utils.log import get_task_logger
from sqlalchemy import select
from .celery_app import celery_app
import os
import re

from .perf_logic import run_performance_from_csv, build_performance_frame, write_txt_report
from .database import engine, Base, session_scope
from .fixtures import seed_demo_data
from . import models

_num_re = re.compile(r'tasks_(\d+)_export', re.IGNORECASE)

logger = get_task_logger(__name__)
logging.basicConfig(level=logging.INFO)

# Directorio donde llegan los exports de tareas
DEFAULT_DIR = os.getenv("TASK_EXPORT_DIR", str(Path(__file__).resolve().parent / "task_exports"))
# Directorio donde guardaremos los reportes .txt
REPORTS_DIR = os.getenv("REPORTS_DIR", str(Path(__file__).resolve().parent / "reports"))

EXPORT_PATTERN = "tasks_*_export.csv"


def _period_key(path_str: str) -> tuple[int, str]:
    """
    Extrae el número de periodo del nombre. Ej: tasks_8_export.csv -> (8, name)
    Si no lo encuentra, queda al final.
    """
    name = Path(path_str).name
    m = _num_re.search(name)
    if m:
        return (int(m.group(1)), name)
    return (10**9, name)


@celery_app.task(name="maintenance_portal.tasks.run_performance_if_exports")
def run_performance_if_exports(directory: str | None = None, reports_directory: str | None = None) -> list[str]:
    dir_path = Path(directory or DEFAULT_DIR)
    reports_dir = Path(reports_directory or REPORTS_DIR)
    reports_dir.mkdir(parents=True, exist_ok=True)

    exports = sorted((str(p) for p in dir_path.glob(EXPORT_PATTERN)), key=_period_key)

    out = []
    processed_paths = []

    for export_csv in exports:
        try:
            df_res, meta = run_performance_from_csv(export_csv)
            report_txt = reports_dir / (Path(export_csv).stem + "_report.txt")
            write_txt_report(str(report_txt), df_res, meta, title=f"Reporte de Técnicos ({Path(export_csv).name})")
            logger.info("[run_performance_if_exports] OK | in=%s | out=%s", export_csv, report_txt)
            out.append(str(report_txt))
            processed_paths.append(export_csv)
        except Exception as e:
            logger.exception("[run_performance_if_exports] Error procesando %s: %s", export_csv, e)

    # Borrar SOLO lo que se procesó con éxito
    for p in processed_paths:
        try:
            Path(p).unlink()
        except OSError as e:
            logger.warning("[run_performance_if_exports] No pude borrar %s: %s", p, e)

    if not processed_paths:
        logger.info("[run_performance_if_exports] No hay archivos de entrada para procesar.")

    return out


@celery_app.task(name="maintenance_portal.tasks.snapshot_performance_report")
def snapshot_performance_report(reports_directory: str | None = None) -> str:
    """Reporte del estado actual de la base, ordenado por score."""
    reports_dir = Path(reports_directory or REPORTS_DIR)
    Base.metadata.create_all(bind=engine)

    with session_scope() as session:
        seed_demo_data(session)
        technicians = session.scalars(select(models.Technician).order_by(models.Technician.id)).all()
        tasks = session.scalars(select(models.Task)).all()
        df_res, meta = build_performance_frame(technicians, tasks, sort_by_score=True)

    report_txt = reports_dir / "performance_snapshot.txt"
    write_txt_report(str(report_txt), df_res, meta, title="Snapshot de Técnicos")
    logger.info("[snapshot_performance_report] out=%s | técnicos=%d", report_txt, len(df_res))
    return str(report_txt)
