from __future__ import annotations

from typing import Iterable, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from backend.app.models.performance import PerformanceDocument
from backend.app.storage.db import PerformanceRecord, as_utc
from backend.app.storage.repositories.base import RepositoryBase


class PerformanceRepository(RepositoryBase):
    def create(self, document: PerformanceDocument, db: Session | None = None) -> PerformanceDocument:
        with self._scope(db) as session:
            session.add(
                PerformanceRecord(
                    id=document.id,
                    name=document.name,
                    year=document.year,
                    budget=document.budget,
                    created_at=document.created_at,
                    updated_at=document.updated_at,
                )
            )
            session.flush()
        return document

    def get(self, performance_id: str, db: Session | None = None) -> PerformanceDocument | None:
        with self._scope(db) as session:
            record = session.get(PerformanceRecord, performance_id)
            if not record:
                return None
            return self._to_document(record)

    def get_many(
        self, performance_ids: Iterable[str], db: Session | None = None
    ) -> dict[str, PerformanceDocument]:
        ids = set(performance_ids)
        if not ids:
            return {}
        with self._scope(db) as session:
            stmt = select(PerformanceRecord).where(PerformanceRecord.id.in_(ids))
            return {record.id: self._to_document(record) for record in session.scalars(stmt).all()}

    def list(self, year: int | None = None, db: Session | None = None) -> Sequence[PerformanceDocument]:
        with self._scope(db) as session:
            stmt = select(PerformanceRecord)
            if year is not None:
                stmt = stmt.where(PerformanceRecord.year == year)
            stmt = stmt.order_by(PerformanceRecord.created_at, PerformanceRecord.id)
            return [self._to_document(record) for record in session.scalars(stmt).all()]

    def update(
        self, performance_id: str, document: PerformanceDocument, db: Session | None = None
    ) -> PerformanceDocument | None:
        with self._scope(db) as session:
            record = session.get(PerformanceRecord, performance_id)
            if not record:
                return None

            record.name = document.name
            record.year = document.year
            record.budget = document.budget
            record.updated_at = document.updated_at
            session.add(record)
            session.flush()
            return self._to_document(record)

    def delete(self, performance_id: str, db: Session | None = None) -> bool:
        with self._scope(db) as session:
            record = session.get(PerformanceRecord, performance_id)
            if not record:
                return False
            session.delete(record)
            session.flush()
        return True

    @staticmethod
    def _to_document(record: PerformanceRecord) -> PerformanceDocument:
        return PerformanceDocument(
            id=record.id,
            name=record.name,
            year=record.year,
            budget=record.budget,
            created_at=as_utc(record.created_at),
            updated_at=as_utc(record.updated_at),
        )
