from pydantic import BaseModel, ConfigDict, Field
from typing import Literal, Optional

TaskStatus = Literal["pending", "in_progress", "resolved"]

class TechnicianBase(BaseModel):
    id: str = Field(min_length=1, max_length=40)
    username: str = Field(min_length=1, max_length=80)
    display_name: str
    specialization: Optional[str] = None

class TechnicianCreate(TechnicianBase):
    pass

class Technician(TechnicianBase):
    class Config:
        from_attributes = True

class TaskBase(BaseModel):
    title: str
    technician_id: str
    status: TaskStatus = "pending"
    building: Optional[str] = None
    category: Optional[str] = None
    response_minutes: Optional[int] = Field(default=None, ge=0)
    resolution_minutes: Optional[int] = Field(default=None, ge=0)
    sla_minutes: Optional[int] = Field(default=None, ge=0)

class TaskCreate(TaskBase):
    pass

class Task(TaskBase):
    id: int
    class Config:
        from_attributes = True

class TechnicianStatsResponse(BaseModel):
    technician_id: str
    display_name: str
    specialization: Optional[str] = None
    total: int
    resolved_count: int
    pending: int
    response_avg: int | None
    resolution_avg: int | None
    score: int

class AdminSummaryResponse(BaseModel):
    resolved: int
    pending: int

class PredictionAlert(BaseModel):
    model_config = ConfigDict(extra="allow")

    building: Optional[str] = None
    message: Optional[str] = None

class TaskRow(BaseModel):
    id: int
    title: str
    building: Optional[str] = None
    status: str
    response_minutes: int | str
    resolution_minutes: int | str
    sla_minutes: int | str

class TechnicianDashboard(BaseModel):
    technician: Technician
    tasks: list[TaskRow]
    metrics: dict[str, int | str]
