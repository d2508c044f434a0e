from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator

from backend.app.models.common import EntityId, reject_null_fields


class PerformanceBase(BaseModel):
    name: str = Field(min_length=1, max_length=128)
    year: int = Field(ge=0, le=9_999)
    budget: float = Field(ge=0, allow_inf_nan=False)


class CastEntry(BaseModel):
    """One initial cast member supplied with a new performance.

    ``performance`` is accepted for compatibility but always replaced by the id
    of the performance being created.
    """

    model_config = ConfigDict(populate_by_name=True)

    actor: EntityId
    role: str = Field(min_length=1, max_length=256)
    annual_contract_value: float = Field(alias="annualContractValue", allow_inf_nan=False)
    performance: str | None = None


class PerformanceCreateRequest(PerformanceBase):
    cast: list[CastEntry] = Field(default_factory=list)


class PerformanceUpdateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=128)
    year: int | None = Field(default=None, ge=0, le=9_999)
    budget: float | None = Field(default=None, ge=0, allow_inf_nan=False)

    @model_validator(mode="after")
    def reject_nulls(self) -> "PerformanceUpdateRequest":
        reject_null_fields(self)
        return self


class PerformanceResponse(PerformanceBase):
    id: str
    created_at: datetime
    updated_at: datetime


class PerformanceSummary(BaseModel):
    id: str
    name: str
    year: int


class PerformanceDocument(PerformanceBase):
    id: str = Field(default_factory=lambda: str(uuid4()))
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
