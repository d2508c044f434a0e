from __future__ import annotations

from pydantic import Field

from backend.app.models.actor import ActorResponse
from backend.app.models.employment import EmploymentResponse
from backend.app.models.performance import PerformanceResponse


class ActorWithEmploymentsResponse(ActorResponse):
    employments: list[EmploymentResponse] = Field(default_factory=list)


class PerformanceWithCastResponse(PerformanceResponse):
    cast: list[EmploymentResponse] = Field(default_factory=list)
