import os
from celery import Celery

# Broker y backend (Redis)
REDIS_HOST = os.getenv("REDIS_HOST", "redis")
REDIS_PORT = int(os.getenv("REDIS_PORT", "6379"))
REDIS_DB = int(os.getenv("REDIS_DB", "0"))
BROKER_URL = os.getenv("CELERY_BROKER_URL", f"redis://{REDIS_HOST}:{REDIS_PORT}/{REDIS_DB}")
RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", f"redis://{REDIS_HOST}:{REDIS_PORT}/{REDIS_DB}")

celery_app = Celery("portal_tasks", broker=BROKER_URL, backend=RESULT_BACKEND, include=["maintenance_portal.tasks"])

# Programación periódica
celery_app.conf.beat_schedule = {
    "run-performance-if-exports-every-minute": {
        "task": "maintenance_portal.tasks.run_performance_if_exports",
        "schedule": 60.0,
    },
    "snapshot-performance-every-hour": {
        "task": "maintenance_portal.tasks.snapshot_performance_report",
        "schedule": 3600.0,
    },
}

celery_app.conf.timezone = os.getenv("CELERY_TIMEZONE", "UTC")
