from __future__ import annotations

from pathlib import Path

from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

DATA_DIR = Path(__file__).resolve().parent.parent / "data"
DB_PATH = DATA_DIR / "restaurant_admin.sqlite3"


def make_engine(url: str | None = None) -> Engine:
    """Build a SQLite engine usable from the threadpool.

    With no url the on-disk database under ``data/`` is used; ``"sqlite://"``
    gives a single shared in-memory connection.
    """
    if url is None:
        DATA_DIR.mkdir(parents=True, exist_ok=True)
        url = f"sqlite:///{DB_PATH}"
    kwargs = {}
    if url == "sqlite://":
        kwargs["poolclass"] = StaticPool
    return create_engine(
        url,
        echo=False,
        connect_args={"check_same_thread": False},
        **kwargs,
    )


def init_db(engine: Engine) -> None:
    # registers the table on SQLModel.metadata
    from . import models  # noqa: F401

    SQLModel.metadata.create_all(engine)


def session_for(engine: Engine) -> Session:
    return Session(engine, expire_on_commit=False)
