from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

from pydantic import BaseModel, Field, model_validator

from backend.app.models.common import MAX_STORED_INT, reject_null_fields


class ActorBase(BaseModel):
    name: str = Field(min_length=1, max_length=128)
    rank: str | None = Field(default=None, max_length=128)
    experience: int = Field(default=0, ge=0, le=MAX_STORED_INT)


class ActorCreateRequest(ActorBase):
    pass


class ActorUpdateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=128)
    rank: str | None = Field(default=None, max_length=128)
    experience: int | None = Field(default=None, ge=0, le=MAX_STORED_INT)

    @model_validator(mode="after")
    def reject_nulls(self) -> "ActorUpdateRequest":
        reject_null_fields(self, nullable=frozenset({"rank"}))
        return self


class ActorResponse(ActorBase):
    id: str
    created_at: datetime
    updated_at: datetime


class ActorSummary(BaseModel):
    id: str
    name: str
    rank: str | None = None


class ActorDocument(ActorBase):
    id: str = Field(default_factory=lambda: str(uuid4()))
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
