from __future__ import annotations

from backend.app.models.user import UserResponse
from backend.app.storage.repositories.user_repository import UserRepository


class UserService:
    def __init__(self, repository: UserRepository):
        self._repository = repository

    def list_users(self) -> list[UserResponse]:
        # Password hashes stay server-side.
        return [
            UserResponse(
                id=document.id,
                username=document.username,
                email=document.email,
                role=document.role,
                created_at=document.created_at,
                updated_at=document.updated_at,
            )
            for document in self._repository.list()
        ]
