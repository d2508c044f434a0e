from __future__ import annotations

from typing import Iterable, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from backend.app.models.actor import ActorDocument
from backend.app.storage.db import ActorRecord, as_utc
from backend.app.storage.repositories.base import RepositoryBase


class ActorRepository(RepositoryBase):
    def create(self, document: ActorDocument, db: Session | None = None) -> ActorDocument:
        with self._scope(db) as session:
            session.add(
                ActorRecord(
                    id=document.id,
                    name=document.name,
                    rank=document.rank,
                    experience=document.experience,
                    created_at=document.created_at,
                    updated_at=document.updated_at,
                )
            )
            session.flush()
        return document

    def get(self, actor_id: str, db: Session | None = None) -> ActorDocument | None:
        with self._scope(db) as session:
            record = session.get(ActorRecord, actor_id)
            if not record:
                return None
            return self._to_document(record)

    def get_many(self, actor_ids: Iterable[str], db: Session | None = None) -> dict[str, ActorDocument]:
        ids = set(actor_ids)
        if not ids:
            return {}
        with self._scope(db) as session:
            stmt = select(ActorRecord).where(ActorRecord.id.in_(ids))
            return {record.id: self._to_document(record) for record in session.scalars(stmt).all()}

    def list(self, db: Session | None = None) -> Sequence[ActorDocument]:
        with self._scope(db) as session:
            stmt = select(ActorRecord).order_by(ActorRecord.created_at, ActorRecord.id)
            return [self._to_document(record) for record in session.scalars(stmt).all()]

    def update(self, actor_id: str, document: ActorDocument, db: Session | None = None) -> ActorDocument | None:
        with self._scope(db) as session:
            record = session.get(ActorRecord, actor_id)
            if not record:
                return None

            record.name = document.name
            record.rank = document.rank
            record.experience = document.experience
            record.updated_at = document.updated_at
            session.add(record)
            session.flush()
            return self._to_document(record)

    def delete(self, actor_id: str, db: Session | None = None) -> bool:
        with self._scope(db) as session:
            record = session.get(ActorRecord, actor_id)
            if not record:
                return False
            session.delete(record)
            session.flush()
        return True

    @staticmethod
    def _to_document(record: ActorRecord) -> ActorDocument:
        return ActorDocument(
            id=record.id,
            name=record.name,
            rank=record.rank,
            experience=record.experience,
            created_at=as_utc(record.created_at),
            updated_at=as_utc(record.updated_at),
        )
