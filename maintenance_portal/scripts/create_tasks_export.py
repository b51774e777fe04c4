import csv
import random
from pathlib import Path

from maintenance_portal.perf_logic import EXPORT_COLUMNS

# create_tasks_export.py está en maintenance_portal/scripts/
PKG_DIR = Path(__file__).resolve().parent.parent
EXPORT_DIR = PKG_DIR / "task_exports"

base_tareas = [
    ["Lift not working", "BSN Block", "electricity"],
    ["Water leakage", "Hostel A", "water"],
    ["WiFi down", "CS Block", "internet"],
    ["Garbage not collected", "Canteen", "garbage"],
    ["Fan not working", "Hostel B", "hostel"],
    ["Projector issue", "Lab Block", "it"],
]

technicians_list = ["tech1", "tech2", "tech3", "tech4"]


def build_demo_export(path: str | Path, n_tasks: int = 200, seed: int | None = None) -> Path:
    """Genera un export de tareas aleatorio con el formato que procesa el worker."""
    rnd = random.Random(seed)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    registros = []
    for i in range(1, n_tasks + 1):
        title, building, category = rnd.choice(base_tareas)
        status = rnd.choice(["pending", "in_progress", "resolved"])
        response = "" if status == "pending" else rnd.randint(1, 40)
        resolution = rnd.randint(5, 120) if status == "resolved" else ""
        registros.append([
            i,
            f"{title} – {building}",
            building,
            category,
            status,
            rnd.choice(technicians_list),
            response,
            resolution,
            rnd.choice([30, 60, 120]),
        ])

    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(EXPORT_COLUMNS)
        writer.writerows(registros)
    return path


if __name__ == "__main__":
    archivo = build_demo_export(EXPORT_DIR / "tasks_1_export.csv")
    print("CSV generado:", archivo)
