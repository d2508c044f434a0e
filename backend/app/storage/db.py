from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Float, Integer, String, Text, create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker


class Base(DeclarativeBase):
    pass


class ActorRecord(Base):
    __tablename__ = "actors"

    id = Column(String(64), primary_key=True)
    name = Column(String(128), nullable=False)
    rank = Column(String(128), nullable=True)
    experience = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)


class PerformanceRecord(Base):
    __tablename__ = "performances"

    id = Column(String(64), primary_key=True)
    name = Column(String(128), nullable=False)
    year = Column(Integer, nullable=False, index=True)
    budget = Column(Float, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)


class EmploymentRecord(Base):
    __tablename__ = "employments"

    # Reference columns are plain indexed ids, not foreign keys: the store does
    # not enforce integrity, the services do.
    id = Column(String(64), primary_key=True)
    actor_id = Column(String(64), nullable=False, index=True)
    performance_id = Column(String(64), nullable=False, index=True)
    role = Column(Text, nullable=False)
    annual_contract_value = Column(Float, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)


class UserRecord(Base):
    __tablename__ = "users"

    id = Column(String(64), primary_key=True)
    username = Column(String(128), nullable=False)
    email = Column(String(320), nullable=False, unique=True)
    password_hash = Column(String(128), nullable=False)
    role = Column(String(32), nullable=False, default="user")
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)


class Database:
    def __init__(self, database_url: str) -> None:
        connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
        self.engine = create_engine(database_url, future=True, connect_args=connect_args)
        self.session_factory = sessionmaker(bind=self.engine, autoflush=False, autocommit=False, class_=Session)

    def create_all(self) -> None:
        Base.metadata.create_all(self.engine)

    @contextmanager
    def session(self) -> Session:
        db = self.session_factory()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back out.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
