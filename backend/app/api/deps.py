from __future__ import annotations

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from backend.app.core.container import AppContainer
from backend.app.core.errors import AuthenticationError
from backend.app.models.user import RequestContext

bearer_scheme = HTTPBearer(auto_error=False)


def get_container(request: Request) -> AppContainer:
    return request.app.state.container


def get_request_context(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    container: AppContainer = Depends(get_container),
) -> RequestContext:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()
    return container.auth_service.authenticate(credentials.credentials)
