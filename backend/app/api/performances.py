from __future__ import annotations

from fastapi import APIRouter, Depends

from backend.app.api.deps import get_container, get_request_context
from backend.app.core.container import AppContainer
from backend.app.models.common import MessageResponse
from backend.app.models.employment import CastMemberResponse
from backend.app.models.performance import (
    PerformanceCreateRequest,
    PerformanceResponse,
    PerformanceUpdateRequest,
)
from backend.app.models.user import RequestContext
from backend.app.models.views import PerformanceWithCastResponse

router = APIRouter(prefix="/performances", tags=["performances"], dependencies=[Depends(get_request_context)])


@router.post("", response_model=PerformanceWithCastResponse, status_code=201)
async def create_performance(
    request: PerformanceCreateRequest,
    context: RequestContext = Depends(get_request_context),
    container: AppContainer = Depends(get_container),
) -> PerformanceWithCastResponse:
    return container.performance_service.create_performance(request, context)


@router.get("", response_model=list[PerformanceWithCastResponse])
async def list_performances(container: AppContainer = Depends(get_container)) -> list[PerformanceWithCastResponse]:
    return container.performance_service.list_performances()


@router.get("/year/{year}", response_model=list[PerformanceResponse])
async def list_performances_by_year(
    year: int, container: AppContainer = Depends(get_container)
) -> list[PerformanceResponse]:
    return container.performance_service.list_performances_by_year(year)


@router.get("/{performance_id}", response_model=PerformanceResponse)
async def get_performance(performance_id: str, container: AppContainer = Depends(get_container)) -> PerformanceResponse:
    return container.performance_service.get_performance(performance_id)


@router.get("/{performance_id}/cast", response_model=list[CastMemberResponse])
async def get_performance_cast(
    performance_id: str, container: AppContainer = Depends(get_container)
) -> list[CastMemberResponse]:
    return container.performance_service.get_cast(performance_id)


@router.put("/{performance_id}", response_model=PerformanceResponse)
async def update_performance(
    performance_id: str,
    request: PerformanceUpdateRequest,
    context: RequestContext = Depends(get_request_context),
    container: AppContainer = Depends(get_container),
) -> PerformanceResponse:
    return container.performance_service.update_performance(performance_id, request, context)


@router.delete("/{performance_id}", response_model=MessageResponse)
async def delete_performance(
    performance_id: str,
    context: RequestContext = Depends(get_request_context),
    container: AppContainer = Depends(get_container),
) -> MessageResponse:
    return container.performance_service.delete_performance(performance_id, context)
