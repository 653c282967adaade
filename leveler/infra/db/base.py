# leveler/infra/db/base.py
from __future__ import annotations
import logging
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from leveler.infra.path import default_db_path

logger = logging.getLogger(__name__)

Base = declarative_base()


def default_db_url() -> str:
    return f"sqlite:///{default_db_path().as_posix()}"


def create_session_factory(db_url: Optional[str] = None, create_schema: bool = True) -> sessionmaker:
    db_url = db_url or default_db_url()
    logger.info("Using database at: %s", db_url)

    engine = create_engine(
        db_url,
        echo=False,
        future=True,
    )
    if create_schema:
        # models must be imported before create_all sees the tables
        from leveler.infra.db import models  # noqa: F401

        Base.metadata.create_all(bind=engine)

    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
