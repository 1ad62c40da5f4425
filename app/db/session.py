import ssl
from typing import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import DATABASE_SSL, DATABASE_URL
from app.core.logging import logger
from app.db.models import Base


def _normalize_database_url(url: str) -> str:
    """Drop query params (sslmode=require etc.) and pick the pg8000 driver for bare postgres URLs.

    SSL is enforced via connect_args instead, since pg8000 rejects sslmode.
    """
    if not url:
        return url
    if "?" in url:
        url = url.split("?", 1)[0]
    if url.startswith("postgres://"):
        url = "postgresql+pg8000://" + url[len("postgres://"):]
    elif url.startswith("postgresql://"):
        url = "postgresql+pg8000://" + url[len("postgresql://"):]
    return url


def _make_engine() -> Engine:
    if not DATABASE_URL:
        raise RuntimeError("DATABASE_URL is not set")

    url = _normalize_database_url(DATABASE_URL)

    connect_args = {}
    if url.startswith("postgresql") and DATABASE_SSL:
        connect_args["ssl_context"] = ssl.create_default_context()

    if url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}

    eng = create_engine(url, pool_pre_ping=True, connect_args=connect_args)
    logger.info("Database engine ready (backend=%s)", eng.url.get_backend_name())
    return eng


engine = _make_engine()
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


def create_schema(bind: Engine = engine) -> None:
    Base.metadata.create_all(bind=bind)


def ping(db: Session) -> bool:
    try:
        db.execute(text("SELECT 1"))
        return True
    except Exception:
        logger.exception("DB ping failed")
        return False


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
