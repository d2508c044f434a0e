from __future__ import annotations

from fastapi import APIRouter, Depends

from backend.app.api.deps import get_container, get_request_context
from backend.app.core.container import AppContainer
from backend.app.models.actor import ActorCreateRequest, ActorResponse, ActorUpdateRequest
from backend.app.models.common import MessageResponse
from backend.app.models.user import RequestContext
from backend.app.models.views import ActorWithEmploymentsResponse

router = APIRouter(prefix="/actors", tags=["actors"], dependencies=[Depends(get_request_context)])


@router.post("", response_model=ActorResponse, status_code=201)
async def create_actor(
    request: ActorCreateRequest,
    context: RequestContext = Depends(get_request_context),
    container: AppContainer = Depends(get_container),
) -> ActorResponse:
    return container.actor_service.create_actor(request, context)


@router.get("", response_model=list[ActorWithEmploymentsResponse])
async def list_actors(container: AppContainer = Depends(get_container)) -> list[ActorWithEmploymentsResponse]:
    return container.actor_service.list_actors()


@router.get("/{actor_id}", response_model=ActorResponse)
async def get_actor(actor_id: str, container: AppContainer = Depends(get_container)) -> ActorResponse:
    return container.actor_service.get_actor(actor_id)


@router.put("/{actor_id}", response_model=ActorResponse)
async def update_actor(
    actor_id: str,
    request: ActorUpdateRequest,
    context: RequestContext = Depends(get_request_context),
    container: AppContainer = Depends(get_container),
) -> ActorResponse:
    return container.actor_service.update_actor(actor_id, request, context)


@router.delete("/{actor_id}", response_model=MessageResponse)
async def delete_actor(
    actor_id: str,
    context: RequestContext = Depends(get_request_context),
    container: AppContainer = Depends(get_container),
) -> MessageResponse:
    return container.actor_service.delete_actor(actor_id, context)
