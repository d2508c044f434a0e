from __future__ import annotations

import logging
from collections import defaultdict
from datetime import datetime, timezone

from backend.app.core.errors import NotFoundError
from backend.app.models.common import MessageResponse
from backend.app.models.employment import CastMemberResponse, EmploymentDocument
from backend.app.models.performance import (
    PerformanceCreateRequest,
    PerformanceDocument,
    PerformanceResponse,
    PerformanceUpdateRequest,
)
from backend.app.models.user import RequestContext
from backend.app.models.views import PerformanceWithCastResponse
from backend.app.services.integrity_service import IntegrityService
from backend.app.storage.repositories.employment_repository import EmploymentRepository
from backend.app.storage.repositories.performance_repository import PerformanceRepository

logger = logging.getLogger(__name__)


class PerformanceService:
    def __init__(
        self,
        repository: PerformanceRepository,
        employment_repository: EmploymentRepository,
        integrity_service: IntegrityService,
    ):
        self._repository = repository
        self._employments = employment_repository
        self._integrity = integrity_service

    def create_performance(
        self, request: PerformanceCreateRequest, context: RequestContext | None = None
    ) -> PerformanceWithCastResponse:
        return self._integrity.create_performance_with_cast(request, context)

    def get_performance(self, performance_id: str) -> PerformanceResponse:
        document = self._repository.get(performance_id)
        if not document:
            raise NotFoundError("Performance", performance_id)
        return PerformanceResponse.model_validate(document.model_dump())

    def list_performances(self) -> list[PerformanceWithCastResponse]:
        performances = self._repository.list()
        cast_by_performance: dict[str, list[EmploymentDocument]] = defaultdict(list)
        for employment in self._employments.list():
            cast_by_performance[employment.performance_id].append(employment)

        return [
            PerformanceWithCastResponse(
                **performance.model_dump(),
                cast=self._integrity.expand_actors(cast_by_performance.get(performance.id, [])),
            )
            for performance in performances
        ]

    def list_performances_by_year(self, year: int) -> list[PerformanceResponse]:
        documents = self._repository.list(year=year)
        return [PerformanceResponse.model_validate(document.model_dump()) for document in documents]

    def get_cast(self, performance_id: str) -> list[CastMemberResponse]:
        return self._integrity.list_cast_for_performance(performance_id)

    def update_performance(
        self,
        performance_id: str,
        request: PerformanceUpdateRequest,
        context: RequestContext | None = None,
    ) -> PerformanceResponse:
        existing = self._repository.get(performance_id)
        if not existing:
            raise NotFoundError("Performance", performance_id)

        fields = request.model_fields_set
        updated = PerformanceDocument(
            id=existing.id,
            name=request.name if "name" in fields else existing.name,
            year=request.year if "year" in fields else existing.year,
            budget=request.budget if "budget" in fields else existing.budget,
            created_at=existing.created_at,
            updated_at=datetime.now(timezone.utc),
        )

        persisted = self._repository.update(performance_id, updated)
        if not persisted:
            raise NotFoundError("Performance", performance_id)

        logger.info(
            "Performance '%s' updated%s", performance_id, f" by user '{context.user_id}'" if context else ""
        )
        return PerformanceResponse.model_validate(persisted.model_dump())

    def delete_performance(self, performance_id: str, context: RequestContext | None = None) -> MessageResponse:
        self._integrity.delete_performance_cascade(performance_id, context)
        return MessageResponse(message="Performance deleted successfully")
