from typing import Any

from .report_models import TechnicianStats

PLACEHOLDER = "-"

STATUS_LABELS = {
    "pending": "Pending",
    "in_progress": "In Progress",
    "resolved": "Resolved",
}

PRIORITY_LABELS = {
    "high": "High",
    "medium": "Medium",
}


def display_value(value: Any) -> Any:
    return PLACEHOLDER if value is None else value


def status_label(status: str | None) -> str:
    return STATUS_LABELS.get(status or "", "New")


def priority_label(priority: str | None) -> str:
    return PRIORITY_LABELS.get(priority or "", "Low")


def stats_row(stats: TechnicianStats) -> dict[str, Any]:
    """Métricas etiquetadas tal como las muestra el panel del técnico."""
    return {
        "Total Tickets": stats.total,
        "Resolved Tickets": stats.resolved_count,
        "Pending / In Progress": stats.pending,
        "Avg Response (min)": display_value(stats.response_avg),
        "Avg Resolution (min)": display_value(stats.resolution_avg),
        "Score": stats.score,
    }
