"""SQLAlchemy models for the ledgerbook document store."""

from datetime import datetime, UTC
from sqlalchemy import Column, Integer, String, Text, DateTime, create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()

SCHEMA_VERSION = 1


class Document(Base):
    """One JSON document per collection key."""

    __tablename__ = "documents"

    key = Column(String, primary_key=True)
    schema_version = Column(Integer, default=SCHEMA_VERSION, nullable=False)
    payload = Column(Text, nullable=False)
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
