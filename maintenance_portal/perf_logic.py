# maintenance_portal/perf_logic.py
from __future__ import annotations

import math
import numbers
from collections.abc import Mapping
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable, List, Tuple

import pandas as pd

from .report_models import OPEN_STATUSES, AdminSummary, TechnicianStats

RESPONSE_TARGET_MIN = 20
RESOLUTION_TARGET_MIN = 40
POINTS_PER_RESOLVED = 10

EXPORT_COLUMNS = [
    "id",
    "title",
    "building",
    "category",
    "status",
    "technician_id",
    "response_minutes",
    "resolution_minutes",
    "sla_minutes",
]


# --------------------------
# Acceso a registros
# --------------------------


def _field(task: Any, name: str) -> Any:
    """Lee un campo de un dict, fila de pandas, modelo ORM o pydantic."""
    if isinstance(task, Mapping):
        return task.get(name)
    return getattr(task, name, None)


def _minutes(value: Any) -> float | None:
    """Devuelve el valor si es un número real utilizable, si no None."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return None
    value = float(value)
    if not math.isfinite(value):
        return None
    return value


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _mean_minutes(values: List[float]) -> int | None:
    if not values:
        return None
    return _round_half_up(sum(values) / len(values))


# --------------------------
# Motor de puntuación
# --------------------------


def compute_tech_stats(technician_id: Any, tasks: Iterable[Any]) -> TechnicianStats:
    """
    Calcula las métricas y el score de un técnico.

    - Filtra las tareas del técnico.
    - resolved_count: tareas 'resolved'; pending: 'pending' o 'in_progress'.
    - response_avg: promedio redondeado de response_minutes donde exista.
    - resolution_avg: promedio redondeado de resolution_minutes, solo tareas resueltas.
    - score = 10 por resuelta + max(0, 20 - response_avg) + max(0, 40 - resolution_avg);
      un promedio ausente no suma ni resta.

    Nunca lanza excepciones: los datos faltantes o mal formados se ignoran.
    """
    own = [t for t in tasks if _field(t, "technician_id") == technician_id]

    resolved = [t for t in own if _field(t, "status") == "resolved"]
    pending = sum(1 for t in own if _field(t, "status") in OPEN_STATUSES)

    responses = [m for m in (_minutes(_field(t, "response_minutes")) for t in own) if m is not None]
    resolutions = [m for m in (_minutes(_field(t, "resolution_minutes")) for t in resolved) if m is not None]

    response_avg = _mean_minutes(responses)
    resolution_avg = _mean_minutes(resolutions)

    score = len(resolved) * POINTS_PER_RESOLVED
    if response_avg is not None:
        score += max(0, RESPONSE_TARGET_MIN - response_avg)
    if resolution_avg is not None:
        score += max(0, RESOLUTION_TARGET_MIN - resolution_avg)

    return TechnicianStats(
        total=len(own),
        resolved_count=len(resolved),
        pending=pending,
        response_avg=response_avg,
        resolution_avg=resolution_avg,
        score=score,
    )


def summarize_tasks(tasks: Iterable[Any]) -> AdminSummary:
    """Resueltas vs. todo lo demás, para las tarjetas del panel admin."""
    resolved = 0
    pending = 0
    for t in tasks:
        if _field(t, "status") == "resolved":
            resolved += 1
        else:
            pending += 1
    return AdminSummary(resolved=resolved, pending=pending)


# --------------------------
# Vista general (pandas)
# --------------------------


def build_performance_frame(
    technicians: Iterable[Any],
    tasks: Iterable[Any],
    sort_by_score: bool = False,
) -> tuple[pd.DataFrame, dict]:
    """
    Una fila por técnico del directorio, cada una calculada con compute_tech_stats.
    Devuelve (df_result, meta).
    """
    tasks = list(tasks)

    rows_out = []
    for tech in technicians:
        tech_id = _field(tech, "id")
        stats = compute_tech_stats(tech_id, tasks)
        rows_out.append({
            "technician_id": tech_id,
            "display_name": _field(tech, "display_name") or str(tech_id),
            "specialization": _field(tech, "specialization") or "",
            "total": stats.total,
            "resolved": stats.resolved_count,
            "pending": stats.pending,
            "avg_response_min": stats.response_avg,
            "avg_resolution_min": stats.resolution_avg,
            "score": stats.score,
        })

    df_result = pd.DataFrame(
        rows_out,
        columns=[
            "technician_id", "display_name", "specialization", "total", "resolved",
            "pending", "avg_response_min", "avg_resolution_min", "score",
        ],
    )
    df_result["avg_response_min"] = df_result["avg_response_min"].astype("Int64")
    df_result["avg_resolution_min"] = df_result["avg_resolution_min"].astype("Int64")

    if sort_by_score and not df_result.empty:
        df_result = (
            df_result.sort_values(
                by=["score", "resolved", "total"],
                ascending=[False, False, False],
                kind="mergesort",
            )
            .reset_index(drop=True)
        )

    summary = summarize_tasks(tasks)
    meta = {
        "total_tasks": len(tasks),
        "resolved_tasks": summary.resolved,
        "open_tasks": summary.pending,
        "active_technicians": int((df_result["total"] > 0).sum()) if not df_result.empty else 0,
    }
    return df_result, meta


def _normalize_frame(df: pd.DataFrame) -> pd.DataFrame:
    """Normaliza tipos y columnas básicas del CSV de tareas."""
    df = df.copy()
    df["technician_id"] = df["technician_id"].astype(str).str.strip()
    df["status"] = df["status"].astype(str).str.strip().str.lower()

    # los minutos pueden venir vacíos / faltantes
    for col in ("response_minutes", "resolution_minutes", "sla_minutes"):
        if col in df.columns:
            df[col] = pd.to_numeric(df[col], errors="coerce")
        else:
            df[col] = float("nan")
    return df


def _technicians_from_frame(df: pd.DataFrame) -> List[dict]:
    """Técnicos del export en orden de primera aparición."""
    seen: list[str] = []
    for tech_id in df["technician_id"]:
        if tech_id and tech_id not in seen:
            seen.append(tech_id)
    return [{"id": tech_id, "display_name": tech_id} for tech_id in seen]


def compute_performance_from_df(df: pd.DataFrame) -> Tuple[pd.DataFrame, dict]:
    """
    1. Normaliza el DataFrame de tareas.
    2. Deriva el listado de técnicos del propio export.
    3. Construye el DataFrame de métricas ordenado por score + meta.
    """
    df = _normalize_frame(df)
    technicians = _technicians_from_frame(df)
    records = df.to_dict("records")
    return build_performance_frame(technicians, records, sort_by_score=True)


def run_performance_from_csv(csv_path: str) -> tuple[pd.DataFrame, dict]:
    """Lee el CSV y llama a compute_performance_from_df."""
    df = pd.read_csv(csv_path, dtype=str, keep_default_na=False)
    return compute_performance_from_df(df)


def write_txt_report(
    txt_path: str,
    df_result: pd.DataFrame,
    meta: dict,
    title: str,
) -> None:
    """
    Genera un reporte de texto alineado con métricas por técnico.
    """
    Path(txt_path).parent.mkdir(parents=True, exist_ok=True)

    def fmt_opt(val):
        if val is None or pd.isna(val):
            return "-"
        return str(int(val))

    lines: list[str] = []
    lines.append(title)
    lines.append("-" * len(title))
    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    lines.append(f"Generado: {now}")
    lines.append("")

    lines.append(f"Tareas totales: {meta.get('total_tasks', 0)}")
    lines.append(f"Resueltas: {meta.get('resolved_tasks', 0)}")
    lines.append(f"Abiertas: {meta.get('open_tasks', 0)}")
    lines.append(f"Técnicos activos: {meta.get('active_technicians', 0)}")
    lines.append("")

    if df_result is None or df_result.empty:
        lines.append("No hubo métricas para mostrar.")
        Path(txt_path).write_text("\n".join(lines), encoding="utf-8")
        return

    cols = ["display_name", "total", "resolved", "pending", "avg_response_min", "avg_resolution_min", "score"]

    df_print = df_result[cols].copy()
    df_print["avg_response_min"] = df_print["avg_response_min"].apply(fmt_opt)
    df_print["avg_resolution_min"] = df_print["avg_resolution_min"].apply(fmt_opt)

    right_align = set(cols) - {"display_name"}

    widths: dict[str, int] = {}
    for c in cols:
        head_len = len(c)
        body_len = df_print[c].astype(str).map(len).max()
        widths[c] = max(head_len, body_len)

    def align(val, col):
        s = str(val)
        w = widths[col]
        if col in right_align:
            return s.rjust(w)
        return s.ljust(w)

    lines.append("  ".join(align(c, c) for c in cols))
    lines.append("  ".join("-" * widths[c] for c in cols))

    for _, row in df_print.iterrows():
        lines.append("  ".join(align(row[c], c) for c in cols))

    Path(txt_path).write_text("\n".join(lines), encoding="utf-8")
