import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from maintenance_portal.database import Base, get_session
from maintenance_portal.fixtures import seed_demo_data
from maintenance_portal.main import app


@pytest.fixture
def session_factory():
    """Base SQLite en memoria nueva para cada test, con los datos demo."""
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    with factory() as session:
        seed_demo_data(session)
        session.commit()
    yield factory
    engine.dispose()


@pytest.fixture
def client(session_factory):
    def _override():
        session = session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    app.dependency_overrides[get_session] = _override
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
