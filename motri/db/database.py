# motri/db/database.py
from __future__ import annotations

import logging
from typing import Generator

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

log = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class Database:
    """
    Haelt Engine + Session-Factory. Wird einmal beim App-Start gebaut und
    ueber app.state an die Requests weitergereicht (kein globaler Cache).
    """

    def __init__(self, url: str, *, echo: bool = False):
        connect_args = {}
        if url.startswith("sqlite"):
            # FastAPI fuehrt sync-Endpunkte im Threadpool aus
            connect_args["check_same_thread"] = False
        self.url = url
        self.engine = create_engine(
            url,
            pool_pre_ping=True,
            future=True,
            echo=echo,
            connect_args=connect_args,
        )
        self.SessionLocal = sessionmaker(bind=self.engine, autocommit=False, autoflush=False)

    def session(self) -> Session:
        return self.SessionLocal()

    def ping(self) -> None:
        """SELECT 1 – wirft bei nicht erreichbarer DB."""
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def create_all(self) -> None:
        init_models()
        Base.metadata.create_all(bind=self.engine)

    def dispose(self) -> None:
        self.engine.dispose()


def get_db(request: Request) -> Generator[Session, None, None]:
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()


def init_models() -> None:
    import motri.models.director  # noqa: F401
    import motri.models.report  # noqa: F401
