from __future__ import annotations

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from backend.app.models.user import UserDocument
from backend.app.storage.db import UserRecord, as_utc
from backend.app.storage.repositories.base import RepositoryBase


class UserRepository(RepositoryBase):
    def create(self, document: UserDocument, db: Session | None = None) -> UserDocument:
        with self._scope(db) as session:
            session.add(
                UserRecord(
                    id=document.id,
                    username=document.username,
                    email=document.email,
                    password_hash=document.password_hash,
                    role=document.role,
                    created_at=document.created_at,
                    updated_at=document.updated_at,
                )
            )
            session.flush()
        return document

    def get(self, user_id: str, db: Session | None = None) -> UserDocument | None:
        with self._scope(db) as session:
            record = session.get(UserRecord, user_id)
            if not record:
                return None
            return self._to_document(record)

    def get_by_email(self, email: str, db: Session | None = None) -> UserDocument | None:
        with self._scope(db) as session:
            record = session.scalars(select(UserRecord).where(UserRecord.email == email)).first()
            if not record:
                return None
            return self._to_document(record)

    def list(self, db: Session | None = None) -> Sequence[UserDocument]:
        with self._scope(db) as session:
            stmt = select(UserRecord).order_by(UserRecord.created_at, UserRecord.id)
            return [self._to_document(record) for record in session.scalars(stmt).all()]

    @staticmethod
    def _to_document(record: UserRecord) -> UserDocument:
        return UserDocument(
            id=record.id,
            username=record.username,
            email=record.email,
            password_hash=record.password_hash,
            role=record.role,
            created_at=as_utc(record.created_at),
            updated_at=as_utc(record.updated_at),
        )
