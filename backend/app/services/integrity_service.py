"""Cross-entity rules for the actor / performance / employment graph.

Anything that touches more than one entity type goes through here: the atomic
"performance with cast" insert, cascading deletes, and the reverse lookups
that stand in for joins.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Sequence
from uuid import uuid4

from sqlalchemy.exc import SQLAlchemyError

from backend.app.core.errors import ConflictError, NotFoundError
from backend.app.models.actor import ActorDocument, ActorSummary
from backend.app.models.employment import CastMemberResponse, EmploymentDocument, EmploymentResponse
from backend.app.models.performance import (
    PerformanceCreateRequest,
    PerformanceDocument,
    PerformanceResponse,
    PerformanceSummary,
)
from backend.app.models.user import RequestContext
from backend.app.models.views import PerformanceWithCastResponse
from backend.app.storage.repositories.actor_repository import ActorRepository
from backend.app.storage.repositories.employment_repository import EmploymentRepository
from backend.app.storage.repositories.performance_repository import PerformanceRepository

logger = logging.getLogger(__name__)


def actor_summary(document: ActorDocument) -> ActorSummary:
    return ActorSummary(id=document.id, name=document.name, rank=document.rank)


def performance_summary(document: PerformanceDocument) -> PerformanceSummary:
    return PerformanceSummary(id=document.id, name=document.name, year=document.year)


def employment_response(
    document: EmploymentDocument,
    actor: ActorSummary | None = None,
    performance: PerformanceResponse | PerformanceSummary | None = None,
) -> EmploymentResponse:
    return EmploymentResponse(
        id=document.id,
        actor=actor if actor is not None else document.actor_id,
        performance=performance if performance is not None else document.performance_id,
        role=document.role,
        annual_contract_value=document.annual_contract_value,
        created_at=document.created_at,
        updated_at=document.updated_at,
    )


def _describe(exc: SQLAlchemyError) -> str:
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


class IntegrityService:
    def __init__(
        self,
        unit_of_work,
        actor_repository: ActorRepository,
        performance_repository: PerformanceRepository,
        employment_repository: EmploymentRepository,
    ):
        self._unit_of_work = unit_of_work
        self._actors = actor_repository
        self._performances = performance_repository
        self._employments = employment_repository

    def create_performance_with_cast(
        self,
        request: PerformanceCreateRequest,
        context: RequestContext | None = None,
    ) -> PerformanceWithCastResponse:
        now = datetime.now(timezone.utc)
        performance = PerformanceDocument(
            id=str(uuid4()),
            name=request.name,
            year=request.year,
            budget=request.budget,
            created_at=now,
            updated_at=now,
        )
        employments = [
            EmploymentDocument(
                id=str(uuid4()),
                actor_id=entry.actor,
                performance_id=performance.id,
                role=entry.role,
                annual_contract_value=entry.annual_contract_value,
                created_at=now,
                updated_at=now,
            )
            for entry in request.cast
        ]

        try:
            with self._unit_of_work() as db:
                self._performances.create(performance, db=db)
                for employment in employments:
                    self._employments.create(employment, db=db)
        except SQLAlchemyError as exc:
            logger.warning("Creating performance '%s' with cast rolled back: %s", request.name, _describe(exc))
            raise ConflictError(_describe(exc)) from exc

        logger.info(
            "Performance '%s' created with %d cast member(s)%s",
            performance.id,
            len(employments),
            f" by user '{context.user_id}'" if context else "",
        )

        try:
            populated = self._populate_performance(performance.id)
        except SQLAlchemyError:
            logger.exception("Reading back performance '%s' failed; returning submitted data", performance.id)
            populated = None
        if populated is not None:
            return populated

        return PerformanceWithCastResponse(
            **performance.model_dump(),
            cast=[employment_response(employment) for employment in employments],
        )

    def delete_actor_cascade(self, actor_id: str, context: RequestContext | None = None) -> int:
        """Delete an actor and every employment referencing it, all or nothing.

        Returns the number of employments removed.
        """
        try:
            with self._unit_of_work() as db:
                if not self._actors.delete(actor_id, db=db):
                    raise NotFoundError("Actor", actor_id)
                removed = self._employments.delete_by_actor(actor_id, db=db)
        except SQLAlchemyError as exc:
            logger.warning("Deleting actor '%s' rolled back: %s", actor_id, _describe(exc))
            raise ConflictError(_describe(exc)) from exc

        logger.info(
            "Actor '%s' deleted with %d employment(s)%s",
            actor_id,
            removed,
            f" by user '{context.user_id}'" if context else "",
        )
        return removed

    def delete_performance_cascade(self, performance_id: str, context: RequestContext | None = None) -> int:
        try:
            with self._unit_of_work() as db:
                if not self._performances.delete(performance_id, db=db):
                    raise NotFoundError("Performance", performance_id)
                removed = self._employments.delete_by_performance(performance_id, db=db)
        except SQLAlchemyError as exc:
            logger.warning("Deleting performance '%s' rolled back: %s", performance_id, _describe(exc))
            raise ConflictError(_describe(exc)) from exc

        logger.info(
            "Performance '%s' deleted with %d employment(s)%s",
            performance_id,
            removed,
            f" by user '{context.user_id}'" if context else "",
        )
        return removed

    def list_cast_for_performance(self, performance_id: str) -> list[CastMemberResponse]:
        employments = self._employments.list(performance_id=performance_id)
        actors = self._actors.get_many(employment.actor_id for employment in employments)
        cast = []
        for employment in employments:
            actor = actors.get(employment.actor_id)
            cast.append(
                CastMemberResponse(
                    id=employment.id,
                    actor=actor_summary(actor) if actor else employment.actor_id,
                    role=employment.role,
                    annual_contract_value=employment.annual_contract_value,
                )
            )
        return cast

    def list_employments_for_actor(self, actor_id: str) -> list[EmploymentResponse]:
        employments = self._employments.list(actor_id=actor_id)
        performances = self._performances.get_many(employment.performance_id for employment in employments)
        return [
            employment_response(
                employment,
                performance=(
                    performance_summary(performances[employment.performance_id])
                    if employment.performance_id in performances
                    else None
                ),
            )
            for employment in employments
        ]

    def list_employments_for_performance(self, performance_id: str) -> list[EmploymentResponse]:
        employments = self._employments.list(performance_id=performance_id)
        return self.expand_actors(employments)

    def expand_actors(self, employments: Sequence[EmploymentDocument]) -> list[EmploymentResponse]:
        actors = self._actors.get_many(employment.actor_id for employment in employments)
        return [
            employment_response(
                employment,
                actor=actor_summary(actors[employment.actor_id]) if employment.actor_id in actors else None,
            )
            for employment in employments
        ]

    def _populate_performance(self, performance_id: str) -> PerformanceWithCastResponse | None:
        with self._unit_of_work() as db:
            performance = self._performances.get(performance_id, db=db)
            if performance is None:
                return None
            employments = self._employments.list(performance_id=performance_id, db=db)
            actors = self._actors.get_many((employment.actor_id for employment in employments), db=db)

        cast = [
            employment_response(
                employment,
                actor=actor_summary(actors[employment.actor_id]) if employment.actor_id in actors else None,
            )
            for employment in employments
        ]
        return PerformanceWithCastResponse(**performance.model_dump(), cast=cast)
