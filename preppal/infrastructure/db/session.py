from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from preppal.infrastructure.config import get_settings
from preppal.infrastructure.db.base import Base  # noqa: F401


def build_engine(database_url: str):
    connect_args = {}
    if database_url.startswith("sqlite"):
        # FastAPI serves sync routes from a threadpool
        connect_args["check_same_thread"] = False
    return create_engine(database_url, pool_pre_ping=True, connect_args=connect_args)


engine = build_engine(get_settings().database_url)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
