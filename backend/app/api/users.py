from __future__ import annotations

from fastapi import APIRouter, Depends

from backend.app.api.deps import get_container, get_request_context
from backend.app.core.container import AppContainer
from backend.app.models.user import UserResponse

router = APIRouter(prefix="/users", tags=["users"], dependencies=[Depends(get_request_context)])


@router.get("", response_model=list[UserResponse])
async def list_users(container: AppContainer = Depends(get_container)) -> list[UserResponse]:
    return container.user_service.list_users()
