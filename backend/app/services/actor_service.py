from __future__ import annotations

import logging
from collections import defaultdict
from datetime import datetime, timezone
from uuid import uuid4

from backend.app.core.errors import NotFoundError
from backend.app.models.actor import ActorCreateRequest, ActorDocument, ActorResponse, ActorUpdateRequest
from backend.app.models.common import MessageResponse
from backend.app.models.employment import EmploymentDocument
from backend.app.models.performance import PerformanceResponse
from backend.app.models.user import RequestContext
from backend.app.models.views import ActorWithEmploymentsResponse
from backend.app.services.integrity_service import IntegrityService, employment_response
from backend.app.storage.repositories.actor_repository import ActorRepository
from backend.app.storage.repositories.employment_repository import EmploymentRepository
from backend.app.storage.repositories.performance_repository import PerformanceRepository

logger = logging.getLogger(__name__)


class ActorService:
    def __init__(
        self,
        repository: ActorRepository,
        employment_repository: EmploymentRepository,
        performance_repository: PerformanceRepository,
        integrity_service: IntegrityService,
    ):
        self._repository = repository
        self._employments = employment_repository
        self._performances = performance_repository
        self._integrity = integrity_service

    def create_actor(self, request: ActorCreateRequest, context: RequestContext | None = None) -> ActorResponse:
        now = datetime.now(timezone.utc)
        document = ActorDocument(
            id=str(uuid4()),
            name=request.name,
            rank=request.rank,
            experience=request.experience,
            created_at=now,
            updated_at=now,
        )
        self._repository.create(document)
        logger.info("Actor '%s' created%s", document.id, f" by user '{context.user_id}'" if context else "")
        return ActorResponse.model_validate(document.model_dump())

    def list_actors(self) -> list[ActorWithEmploymentsResponse]:
        actors = self._repository.list()
        employments = self._employments.list()
        performances = self._performances.get_many(employment.performance_id for employment in employments)

        by_actor: dict[str, list[EmploymentDocument]] = defaultdict(list)
        for employment in employments:
            by_actor[employment.actor_id].append(employment)

        result = []
        for actor in actors:
            expanded = []
            for employment in by_actor.get(actor.id, []):
                performance = performances.get(employment.performance_id)
                expanded.append(
                    employment_response(
                        employment,
                        performance=(
                            PerformanceResponse.model_validate(performance.model_dump()) if performance else None
                        ),
                    )
                )
            result.append(ActorWithEmploymentsResponse(**actor.model_dump(), employments=expanded))
        return result

    def get_actor(self, actor_id: str) -> ActorResponse:
        document = self._repository.get(actor_id)
        if not document:
            raise NotFoundError("Actor", actor_id)
        return ActorResponse.model_validate(document.model_dump())

    def update_actor(
        self, actor_id: str, request: ActorUpdateRequest, context: RequestContext | None = None
    ) -> ActorResponse:
        existing = self._repository.get(actor_id)
        if not existing:
            raise NotFoundError("Actor", actor_id)

        fields = request.model_fields_set
        updated = ActorDocument(
            id=existing.id,
            name=request.name if "name" in fields else existing.name,
            rank=request.rank if "rank" in fields else existing.rank,
            experience=request.experience if "experience" in fields else existing.experience,
            created_at=existing.created_at,
            updated_at=datetime.now(timezone.utc),
        )

        persisted = self._repository.update(actor_id, updated)
        if not persisted:
            raise NotFoundError("Actor", actor_id)

        logger.info("Actor '%s' updated%s", actor_id, f" by user '{context.user_id}'" if context else "")
        return ActorResponse.model_validate(persisted.model_dump())

    def delete_actor(self, actor_id: str, context: RequestContext | None = None) -> MessageResponse:
        self._integrity.delete_actor_cascade(actor_id, context)
        return MessageResponse(message="Actor and associated employments deleted successfully")
