"""
Cliente del API externo de incidentes.

El portal solo reenvía estos datos para mostrarlos; si el API no responde
se registra el error y se devuelve una lista vacía.
"""
import asyncio
import logging
import os
from typing import Any, Optional

import aiohttp

logger = logging.getLogger(__name__)

API_URL = os.getenv("INCIDENTS_API_URL", "http://localhost:4000").rstrip("/")
TIMEOUT_SEC = float(os.getenv("INCIDENTS_API_TIMEOUT", "5"))


async def _get_json(path: str, session: Optional[aiohttp.ClientSession] = None) -> Any:
    url = f"{API_URL}{path}"
    own_session = session is None
    if own_session:
        session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=TIMEOUT_SEC))
    try:
        async with session.get(url) as resp:
            resp.raise_for_status()
            return await resp.json()
    finally:
        if own_session:
            await session.close()


async def fetch_incidents(session: Optional[aiohttp.ClientSession] = None) -> list[dict]:
    try:
        data = await _get_json("/api/incidents", session)
    except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
        logger.error("Error loading incidents: %s", e)
        return []
    if not isinstance(data, list):
        logger.warning("Respuesta inesperada de /api/incidents: %s", type(data).__name__)
        return []
    return data


async def fetch_predictions(session: Optional[aiohttp.ClientSession] = None) -> list[dict]:
    try:
        data = await _get_json("/api/incidents/predictions", session)
    except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
        logger.error("Error loading predictions: %s", e)
        return []
    alerts = data.get("alerts") if isinstance(data, dict) else None
    if not isinstance(alerts, list):
        return []
    return [a for a in alerts if isinstance(a, dict)]
