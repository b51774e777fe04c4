from dataclasses import dataclass, asdict

OPEN_STATUSES = ("pending", "in_progress")


@dataclass(frozen=True)
class TechnicianStats:
    total: int = 0
    resolved_count: int = 0
    pending: int = 0
    response_avg: int | None = None
    resolution_avg: int | None = None
    score: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class AdminSummary:
    resolved: int
    pending: int
