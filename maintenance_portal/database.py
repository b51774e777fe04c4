from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from sqlalchemy.pool import StaticPool
import os
from contextlib import contextmanager

# En memoria por defecto: cada proceso tiene su propia base con los datos demo.
# API y worker solo comparten datos con una URL común, p. ej. mysql+pymysql://perf_user:perf_pass@db:3306/perf_db
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+pysqlite:///:memory:")

class Base(DeclarativeBase):
    pass

def make_engine(url: str):
    if url.startswith("sqlite") and ":memory:" in url:
        # una sola conexión compartida, si no cada sesión vería una base vacía
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(
        url,
        pool_pre_ping=True,
        pool_recycle=3600,
    )

engine = make_engine(DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def get_session():
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()

@contextmanager
def session_scope():
    yield from get_session()
