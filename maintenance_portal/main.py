import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from .database import engine, Base, session_scope
from .fixtures import seed_demo_data
from .routers import technicians, admin, incidents

logging.basicConfig(level=logging.INFO)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Crear tablas al inicio (usa Alembic para producción)
    Base.metadata.create_all(bind=engine)
    with session_scope() as session:
        seed_demo_data(session)
    yield

app = FastAPI(title="Campus Maintenance Portal API", version="0.1.0", lifespan=lifespan)

@app.get("/health", tags=["health"])
def health():
    return {"status": "ok"}

app.include_router(technicians.router)
app.include_router(admin.router)
app.include_router(incidents.router)
