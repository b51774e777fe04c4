from typing import Any

from fastapi import APIRouter
from .. import incidents_client, schemas
from ..formatters import priority_label, status_label

router = APIRouter(prefix="/incidents", tags=["incidents"])

@router.get("/", response_model=list[dict[str, Any]])
async def list_incidents():
    incidents = await incidents_client.fetch_incidents()
    return [
        {
            **inc,
            "status_label": status_label(inc.get("status")),
            "priority_label": priority_label(inc.get("priority")),
        }
        for inc in incidents
        if isinstance(inc, dict)
    ]

@router.get("/predictions", response_model=list[schemas.PredictionAlert])
async def list_predictions():
    return await incidents_client.fetch_predictions()
