# tests/test_perf_logic.py
import copy
from io import StringIO
import pandas as pd

from maintenance_portal.fixtures import DEMO_TASKS, DEMO_TECHNICIANS
from maintenance_portal.perf_logic import (
    build_performance_frame,
    compute_performance_from_df,
    compute_tech_stats,
    run_performance_from_csv,
    summarize_tasks,
    write_txt_report,
)
from maintenance_portal.report_models import TechnicianStats


SAMPLE_CSV = """id,title,building,category,status,technician_id,response_minutes,resolution_minutes,sla_minutes
1,Lift not working,BSN Block,electricity,in_progress,tech1,7,,30
2,Lift inspection,Lab Block,electricity,pending,tech2,,,30
3,Water leakage,Hostel A,water,resolved,tech1,10,45,60
4,WiFi down,CS Block,internet, Resolved ,tech3,4,20,60
5,Garbage,Canteen,garbage,resolved,tech3,6,30,120
6,Fan broken,Hostel B,hostel,pending,tech2,abc,,30
"""


def load_sample_df() -> pd.DataFrame:
    return pd.read_csv(StringIO(SAMPLE_CSV), dtype=str, keep_default_na=False)


def task(tech="t1", status="pending", response=None, resolution=None):
    return {
        "technician_id": tech,
        "status": status,
        "response_minutes": response,
        "resolution_minutes": resolution,
    }


def test_single_resolved_task():
    stats = compute_tech_stats("t1", [task(status="resolved", response=10, resolution=45)])
    assert stats == TechnicianStats(
        total=1, resolved_count=1, pending=0, response_avg=10, resolution_avg=45, score=20,
    )


def test_open_tasks_only_response_bonus():
    tasks = [
        task(status="in_progress", response=7),
        task(status="pending"),
    ]
    stats = compute_tech_stats("t1", tasks)
    assert stats.total == 2
    assert stats.resolved_count == 0
    assert stats.pending == 2
    assert stats.response_avg == 7
    assert stats.resolution_avg is None
    assert stats.score == 13


def test_technician_without_tasks_gets_baseline():
    stats = compute_tech_stats("nobody", [task(tech="t1", status="resolved", response=3, resolution=5)])
    assert stats.to_dict() == {
        "total": 0,
        "resolved_count": 0,
        "pending": 0,
        "response_avg": None,
        "resolution_avg": None,
        "score": 0,
    }
    assert compute_tech_stats("nobody", []) == TechnicianStats()


def test_resolution_average_at_threshold_adds_nothing():
    tasks = [
        task(status="resolved", resolution=30),
        task(status="resolved", resolution=50),
    ]
    stats = compute_tech_stats("t1", tasks)
    assert stats.resolution_avg == 40
    assert stats.response_avg is None
    assert stats.score == 20


def test_rounding_is_half_up():
    tasks = [task(status="in_progress", response=2), task(status="in_progress", response=3)]
    assert compute_tech_stats("t1", tasks).response_avg == 3

    tasks = [task(status="resolved", resolution=4), task(status="resolved", resolution=7)]
    assert compute_tech_stats("t1", tasks).resolution_avg == 6


def test_bonus_terms_never_negative():
    tasks = [task(status="resolved", response=500, resolution=10_000)]
    stats = compute_tech_stats("t1", tasks)
    assert stats.score == 10


def test_resolution_time_of_unresolved_task_is_ignored():
    tasks = [
        task(status="in_progress", response=5, resolution=1),
        task(status="resolved", response=5, resolution=None),
    ]
    stats = compute_tech_stats("t1", tasks)
    # la resuelta sin tiempo cuenta igual en resolved_count
    assert stats.resolved_count == 1
    assert stats.resolution_avg is None
    assert stats.score == 10 + 15


def test_malformed_minutes_are_absent():
    tasks = [
        task(status="in_progress", response="12"),
        task(status="in_progress", response=True),
        task(status="in_progress", response=float("nan")),
        {"technician_id": "t1", "status": "pending"},
    ]
    stats = compute_tech_stats("t1", tasks)
    assert stats.total == 4
    assert stats.pending == 4
    assert stats.response_avg is None
    assert stats.score == 0


def test_infinite_minutes_are_absent():
    tasks = [
        task(status="resolved", response=float("inf"), resolution=10),
        task(status="resolved", response=4, resolution=float("-inf")),
    ]
    stats = compute_tech_stats("t1", tasks)
    assert stats.response_avg == 4
    assert stats.resolution_avg == 10
    assert stats.score == 20 + 16 + 30


def test_inf_cell_in_export_is_absent():
    csv = SAMPLE_CSV.replace("tech3,4,20,60", "tech3,inf,20,60")
    df = pd.read_csv(StringIO(csv), dtype=str, keep_default_na=False)
    df_result, _ = compute_performance_from_df(df)

    tech3 = df_result[df_result["technician_id"] == "tech3"].iloc[0]
    assert tech3["avg_response_min"] == 6
    assert tech3["score"] == 20 + 14 + 15


def test_score_grows_with_resolved_count():
    base = [task(status="resolved", response=5, resolution=20)]
    more = base + [task(status="resolved", response=5, resolution=20)]
    assert compute_tech_stats("t1", more).score > compute_tech_stats("t1", base).score


def test_accepts_objects_and_does_not_mutate_input():
    class Row:
        def __init__(self, **kw):
            self.__dict__.update(kw)

    rows = [Row(**t) for t in DEMO_TASKS]
    snapshot = copy.deepcopy(DEMO_TASKS)

    first = compute_tech_stats("tech1", rows)
    second = compute_tech_stats("tech1", DEMO_TASKS)
    assert first == second
    assert compute_tech_stats("tech1", DEMO_TASKS) == second
    assert DEMO_TASKS == snapshot

    assert second.total == 2
    assert second.resolved_count == 1
    assert second.pending == 1
    # response (7 + 10) / 2 = 8.5 -> 9 ; resolution 45
    assert second.response_avg == 9
    assert second.resolution_avg == 45
    assert second.score == 10 + 11 + 0


def test_resolved_plus_pending_equals_total():
    tasks = [
        task(tech="a", status="pending"),
        task(tech="a", status="resolved", resolution=3),
        task(tech="a", status="in_progress", response=1),
        task(tech="b", status="resolved"),
    ]
    for tech in ("a", "b"):
        stats = compute_tech_stats(tech, tasks)
        assert stats.resolved_count + stats.pending == stats.total


def test_summarize_tasks_counts_everything_not_resolved_as_pending():
    summary = summarize_tasks(DEMO_TASKS + [task(status="cancelled")])
    assert summary.resolved == 1
    assert summary.pending == 3


def test_performance_frame_for_demo_directory():
    df_result, meta = build_performance_frame(DEMO_TECHNICIANS, DEMO_TASKS)

    assert list(df_result["technician_id"]) == ["tech1", "tech2"]
    tech2 = df_result.iloc[1]
    assert tech2["total"] == 1
    assert tech2["pending"] == 1
    assert pd.isna(tech2["avg_response_min"])
    assert tech2["score"] == 0

    assert meta["total_tasks"] == 3
    assert meta["resolved_tasks"] == 1
    assert meta["open_tasks"] == 2
    assert meta["active_technicians"] == 2


def test_metrics_for_sample_export():
    df_result, meta = compute_performance_from_df(load_sample_df())

    by_tech = {row["technician_id"]: row for row in df_result.to_dict("records")}

    # tech3: 2 resueltas, response (4+6)/2 = 5, resolution (20+30)/2 = 25
    assert by_tech["tech3"]["resolved"] == 2
    assert by_tech["tech3"]["avg_response_min"] == 5
    assert by_tech["tech3"]["avg_resolution_min"] == 25
    assert by_tech["tech3"]["score"] == 20 + 15 + 15

    # tech2: "abc" no es un tiempo válido
    assert by_tech["tech2"]["pending"] == 2
    assert pd.isna(by_tech["tech2"]["avg_response_min"])

    # orden por score descendente
    assert list(df_result["technician_id"]) == ["tech3", "tech1", "tech2"]
    assert meta["total_tasks"] == 6
    assert meta["resolved_tasks"] == 3


def test_csv_report_uses_placeholder(tmp_path):
    csv_path = tmp_path / "tasks_1_export.csv"
    csv_path.write_text(SAMPLE_CSV, encoding="utf-8")
    df_result, meta = run_performance_from_csv(str(csv_path))

    txt = tmp_path / "out" / "report.txt"
    write_txt_report(str(txt), df_result, meta, title="Reporte")

    content = txt.read_text(encoding="utf-8").splitlines()
    assert content[0] == "Reporte"
    assert "Tareas totales: 6" in content
    tech2_line = next(line for line in content if line.startswith("tech2"))
    assert tech2_line.split()[4:6] == ["-", "-"]


def test_empty_report(tmp_path):
    df_result, meta = build_performance_frame([], [])
    txt = tmp_path / "empty.txt"
    write_txt_report(str(txt), df_result, meta, title="Vacío")
    assert "No hubo métricas para mostrar." in txt.read_text(encoding="utf-8")
