from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Sequence
from uuid import uuid4

from backend.app.core.errors import NotFoundError
from backend.app.models.common import MessageResponse
from backend.app.models.employment import (
    EmploymentCreateRequest,
    EmploymentDocument,
    EmploymentResponse,
    EmploymentUpdateRequest,
)
from backend.app.models.user import RequestContext
from backend.app.services.integrity_service import (
    IntegrityService,
    actor_summary,
    employment_response,
    performance_summary,
)
from backend.app.storage.repositories.actor_repository import ActorRepository
from backend.app.storage.repositories.employment_repository import EmploymentRepository
from backend.app.storage.repositories.performance_repository import PerformanceRepository

logger = logging.getLogger(__name__)


class EmploymentService:
    def __init__(
        self,
        repository: EmploymentRepository,
        actor_repository: ActorRepository,
        performance_repository: PerformanceRepository,
        integrity_service: IntegrityService,
    ):
        self._repository = repository
        self._actors = actor_repository
        self._performances = performance_repository
        self._integrity = integrity_service

    def create_employment(
        self, request: EmploymentCreateRequest, context: RequestContext | None = None
    ) -> EmploymentResponse:
        # Only the id format is validated; referenced records may not exist.
        now = datetime.now(timezone.utc)
        document = EmploymentDocument(
            id=str(uuid4()),
            actor_id=request.actor,
            performance_id=request.performance,
            role=request.role,
            annual_contract_value=request.annual_contract_value,
            created_at=now,
            updated_at=now,
        )
        self._repository.create(document)
        logger.info(
            "Employment '%s' created for actor '%s' in performance '%s'%s",
            document.id,
            document.actor_id,
            document.performance_id,
            f" by user '{context.user_id}'" if context else "",
        )
        return employment_response(document)

    def list_employments(self) -> list[EmploymentResponse]:
        return self._expand(self._repository.list())

    def get_employment(self, employment_id: str) -> EmploymentResponse:
        document = self._repository.get(employment_id)
        if not document:
            raise NotFoundError("Employment", employment_id)
        return self._expand([document])[0]

    def list_for_actor(self, actor_id: str) -> list[EmploymentResponse]:
        return self._integrity.list_employments_for_actor(actor_id)

    def list_for_performance(self, performance_id: str) -> list[EmploymentResponse]:
        return self._integrity.list_employments_for_performance(performance_id)

    def update_employment(
        self,
        employment_id: str,
        request: EmploymentUpdateRequest,
        context: RequestContext | None = None,
    ) -> EmploymentResponse:
        existing = self._repository.get(employment_id)
        if not existing:
            raise NotFoundError("Employment", employment_id)

        fields = request.model_fields_set
        updated = EmploymentDocument(
            id=existing.id,
            actor_id=request.actor if "actor" in fields else existing.actor_id,
            performance_id=request.performance if "performance" in fields else existing.performance_id,
            role=request.role if "role" in fields else existing.role,
            annual_contract_value=(
                request.annual_contract_value
                if "annual_contract_value" in fields
                else existing.annual_contract_value
            ),
            created_at=existing.created_at,
            updated_at=datetime.now(timezone.utc),
        )

        persisted = self._repository.update(employment_id, updated)
        if not persisted:
            raise NotFoundError("Employment", employment_id)

        logger.info(
            "Employment '%s' updated%s", employment_id, f" by user '{context.user_id}'" if context else ""
        )
        return self._expand([persisted])[0]

    def delete_employment(self, employment_id: str, context: RequestContext | None = None) -> MessageResponse:
        deleted = self._repository.delete(employment_id)
        if not deleted:
            raise NotFoundError("Employment", employment_id)
        logger.info(
            "Employment '%s' deleted%s", employment_id, f" by user '{context.user_id}'" if context else ""
        )
        return MessageResponse(message="Employment deleted successfully")

    def _expand(self, documents: Sequence[EmploymentDocument]) -> list[EmploymentResponse]:
        actors = self._actors.get_many(document.actor_id for document in documents)
        performances = self._performances.get_many(document.performance_id for document in documents)
        return [
            employment_response(
                document,
                actor=actor_summary(actors[document.actor_id]) if document.actor_id in actors else None,
                performance=(
                    performance_summary(performances[document.performance_id])
                    if document.performance_id in performances
                    else None
                ),
            )
            for document in documents
        ]
