# lms_nav/core/database.py

from typing import Generator

from loguru import logger
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from lms_nav.core.config import settings


# ----------------------------------------------------
# Engine
# ----------------------------------------------------
def make_engine(database_url: str = None) -> Engine:
    database_url = database_url or settings.DATABASE_URL
    connect_args = {}
    if database_url.startswith("sqlite"):
        # Sessions are opened from the event loop thread and the API workers
        connect_args["check_same_thread"] = False

    return create_engine(
        database_url,
        echo=False,
        connect_args=connect_args,
        pool_pre_ping=True,
    )


engine = make_engine()


# ----------------------------------------------------
# Sessions
# ----------------------------------------------------
def get_session() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


# ----------------------------------------------------
# Create tables
# ----------------------------------------------------
def init_db(bind: Engine = None):
    # Registers DepartmentSelection on the metadata
    from lms_nav.models import department_selection  # noqa: F401

    SQLModel.metadata.create_all(bind or engine)


def check_connection(bind: Engine = None):
    with (bind or engine).connect() as conn:
        conn.execute(text("SELECT 1"))
        logger.info("DB connection OK")
