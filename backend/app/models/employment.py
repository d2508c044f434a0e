from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator

from backend.app.models.actor import ActorSummary
from backend.app.models.common import EntityId, reject_null_fields
from backend.app.models.performance import PerformanceResponse, PerformanceSummary


class EmploymentBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    role: str = Field(min_length=1, max_length=256)
    annual_contract_value: float = Field(alias="annualContractValue", allow_inf_nan=False)


class EmploymentCreateRequest(EmploymentBase):
    actor: EntityId
    performance: EntityId


class EmploymentUpdateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    actor: EntityId | None = None
    performance: EntityId | None = None
    role: str | None = Field(default=None, min_length=1, max_length=256)
    annual_contract_value: float | None = Field(
        default=None, alias="annualContractValue", allow_inf_nan=False
    )

    @model_validator(mode="after")
    def reject_nulls(self) -> "EmploymentUpdateRequest":
        reject_null_fields(self)
        return self


class EmploymentResponse(EmploymentBase):
    """An employment with its references either as ids or expanded records.

    A reference is left as a bare id when it was not requested for expansion
    or when the referenced record no longer exists.
    """

    id: str
    actor: ActorSummary | str
    performance: PerformanceResponse | PerformanceSummary | str
    created_at: datetime
    updated_at: datetime


class CastMemberResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    actor: ActorSummary | str
    role: str
    annual_contract_value: float = Field(alias="annualContractValue")


class EmploymentDocument(EmploymentBase):
    id: str = Field(default_factory=lambda: str(uuid4()))
    actor_id: str
    performance_id: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
