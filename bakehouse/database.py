"""
Database schema and connection management.

Uses SQLite with SQLAlchemy for the catalog of ingredients, products and recipes.
"""

import uuid
from datetime import datetime
from functools import lru_cache
from pathlib import Path
from sqlalchemy import create_engine, Column, String, DateTime
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


class CatalogItem(Base):
    """Catalog entry model."""

    __tablename__ = "catalog_items"

    id = Column(String, primary_key=True, default=_new_id)
    kind = Column(String, nullable=False, index=True)  # ingredient, product, recipe
    name = Column(String, nullable=False)
    code = Column(String, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)


@lru_cache(maxsize=None)
def _engine_for(url: str):
    return create_engine(url)


def get_engine(db_path: Path):
    """One engine per database file, shared by every session on it."""
    return _engine_for(f"sqlite:///{Path(db_path).resolve()}")


def init_database(db_path: Path) -> None:
    """
    Initialize database and create tables.

    Args:
        db_path: Path to SQLite database file
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    Base.metadata.create_all(get_engine(db_path))


def get_session(db_path: Path):
    """
    Get database session.

    Args:
        db_path: Path to SQLite database file

    Returns:
        SQLAlchemy session
    """
    Session = sessionmaker(bind=get_engine(db_path))
    return Session()
