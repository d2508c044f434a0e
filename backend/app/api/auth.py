from __future__ import annotations

from fastapi import APIRouter, Depends

from backend.app.api.deps import get_container
from backend.app.core.container import AppContainer
from backend.app.models.user import AuthResponse, LoginRequest, RegisterRequest

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(request: RegisterRequest, container: AppContainer = Depends(get_container)) -> AuthResponse:
    return container.auth_service.register(request)


@router.post("/login", response_model=AuthResponse)
async def login(request: LoginRequest, container: AppContainer = Depends(get_container)) -> AuthResponse:
    return container.auth_service.login(request)
