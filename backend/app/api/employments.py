from __future__ import annotations

from fastapi import APIRouter, Depends

from backend.app.api.deps import get_container, get_request_context
from backend.app.core.container import AppContainer
from backend.app.models.common import MessageResponse
from backend.app.models.employment import EmploymentCreateRequest, EmploymentResponse, EmploymentUpdateRequest
from backend.app.models.user import RequestContext

router = APIRouter(prefix="/employments", tags=["employments"], dependencies=[Depends(get_request_context)])


@router.post("", response_model=EmploymentResponse, status_code=201)
async def create_employment(
    request: EmploymentCreateRequest,
    context: RequestContext = Depends(get_request_context),
    container: AppContainer = Depends(get_container),
) -> EmploymentResponse:
    return container.employment_service.create_employment(request, context)


@router.get("", response_model=list[EmploymentResponse])
async def list_employments(container: AppContainer = Depends(get_container)) -> list[EmploymentResponse]:
    return container.employment_service.list_employments()


@router.get("/actor/{actor_id}", response_model=list[EmploymentResponse])
async def list_employments_for_actor(
    actor_id: str, container: AppContainer = Depends(get_container)
) -> list[EmploymentResponse]:
    return container.employment_service.list_for_actor(actor_id)


@router.get("/performance/{performance_id}", response_model=list[EmploymentResponse])
async def list_employments_for_performance(
    performance_id: str, container: AppContainer = Depends(get_container)
) -> list[EmploymentResponse]:
    return container.employment_service.list_for_performance(performance_id)


@router.get("/{employment_id}", response_model=EmploymentResponse)
async def get_employment(employment_id: str, container: AppContainer = Depends(get_container)) -> EmploymentResponse:
    return container.employment_service.get_employment(employment_id)


@router.put("/{employment_id}", response_model=EmploymentResponse)
async def update_employment(
    employment_id: str,
    request: EmploymentUpdateRequest,
    context: RequestContext = Depends(get_request_context),
    container: AppContainer = Depends(get_container),
) -> EmploymentResponse:
    return container.employment_service.update_employment(employment_id, request, context)


@router.delete("/{employment_id}", response_model=MessageResponse)
async def delete_employment(
    employment_id: str,
    context: RequestContext = Depends(get_request_context),
    container: AppContainer = Depends(get_container),
) -> MessageResponse:
    return container.employment_service.delete_employment(employment_id, context)
