from __future__ import annotations

from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from backend.app.models.employment import EmploymentDocument
from backend.app.storage.db import EmploymentRecord, as_utc
from backend.app.storage.repositories.base import RepositoryBase


class EmploymentRepository(RepositoryBase):
    def create(self, document: EmploymentDocument, db: Session | None = None) -> EmploymentDocument:
        with self._scope(db) as session:
            session.add(
                EmploymentRecord(
                    id=document.id,
                    actor_id=document.actor_id,
                    performance_id=document.performance_id,
                    role=document.role,
                    annual_contract_value=document.annual_contract_value,
                    created_at=document.created_at,
                    updated_at=document.updated_at,
                )
            )
            session.flush()
        return document

    def get(self, employment_id: str, db: Session | None = None) -> EmploymentDocument | None:
        with self._scope(db) as session:
            record = session.get(EmploymentRecord, employment_id)
            if not record:
                return None
            return self._to_document(record)

    def list(
        self,
        actor_id: str | None = None,
        performance_id: str | None = None,
        db: Session | None = None,
    ) -> Sequence[EmploymentDocument]:
        with self._scope(db) as session:
            stmt = select(EmploymentRecord)
            if actor_id is not None:
                stmt = stmt.where(EmploymentRecord.actor_id == actor_id)
            if performance_id is not None:
                stmt = stmt.where(EmploymentRecord.performance_id == performance_id)
            stmt = stmt.order_by(EmploymentRecord.created_at, EmploymentRecord.id)
            return [self._to_document(record) for record in session.scalars(stmt).all()]

    def update(
        self, employment_id: str, document: EmploymentDocument, db: Session | None = None
    ) -> EmploymentDocument | None:
        with self._scope(db) as session:
            record = session.get(EmploymentRecord, employment_id)
            if not record:
                return None

            record.actor_id = document.actor_id
            record.performance_id = document.performance_id
            record.role = document.role
            record.annual_contract_value = document.annual_contract_value
            record.updated_at = document.updated_at
            session.add(record)
            session.flush()
            return self._to_document(record)

    def delete(self, employment_id: str, db: Session | None = None) -> bool:
        with self._scope(db) as session:
            record = session.get(EmploymentRecord, employment_id)
            if not record:
                return False
            session.delete(record)
            session.flush()
        return True

    def delete_by_actor(self, actor_id: str, db: Session | None = None) -> int:
        with self._scope(db) as session:
            result = session.execute(delete(EmploymentRecord).where(EmploymentRecord.actor_id == actor_id))
            return result.rowcount or 0

    def delete_by_performance(self, performance_id: str, db: Session | None = None) -> int:
        with self._scope(db) as session:
            result = session.execute(
                delete(EmploymentRecord).where(EmploymentRecord.performance_id == performance_id)
            )
            return result.rowcount or 0

    @staticmethod
    def _to_document(record: EmploymentRecord) -> EmploymentDocument:
        return EmploymentDocument(
            id=record.id,
            actor_id=record.actor_id,
            performance_id=record.performance_id,
            role=record.role,
            annual_contract_value=record.annual_contract_value,
            created_at=as_utc(record.created_at),
            updated_at=as_utc(record.updated_at),
        )
