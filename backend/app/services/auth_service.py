from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt
from sqlalchemy.exc import IntegrityError

from backend.app.core.config import Settings
from backend.app.core.errors import AuthenticationError, InvalidInputError
from backend.app.core.security import create_access_token, decode_access_token, hash_password, verify_password
from backend.app.models.user import AuthResponse, AuthUser, LoginRequest, RegisterRequest, RequestContext, UserDocument
from backend.app.storage.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


class AuthService:
    def __init__(self, settings: Settings, repository: UserRepository):
        self._settings = settings
        self._repository = repository

    def register(self, request: RegisterRequest) -> AuthResponse:
        if self._repository.get_by_email(request.email):
            raise InvalidInputError("Registration failed: email is already registered")

        now = datetime.now(timezone.utc)
        document = UserDocument(
            id=str(uuid4()),
            username=request.username,
            email=request.email,
            password_hash=hash_password(request.password, rounds=self._settings.bcrypt_rounds),
            created_at=now,
            updated_at=now,
        )
        try:
            self._repository.create(document)
        except IntegrityError as exc:
            # Lost a race with a concurrent registration for the same email.
            raise InvalidInputError("Registration failed: email is already registered") from exc

        logger.info("User '%s' registered", document.id)
        return self._issue(document)

    def login(self, request: LoginRequest) -> AuthResponse:
        document = self._repository.get_by_email(request.email)
        if document is None or not verify_password(request.password, document.password_hash):
            logger.info("Rejected login attempt")
            raise AuthenticationError(INVALID_CREDENTIALS)
        return self._issue(document)

    def authenticate(self, token: str) -> RequestContext:
        try:
            user_id = decode_access_token(token, self._settings.secret_key, self._settings.token_algorithm)
        except jwt.InvalidTokenError as exc:
            logger.debug("Rejected bearer token: %s", exc)
            raise AuthenticationError("Invalid or expired token") from exc

        document = self._repository.get(user_id)
        if document is None:
            raise AuthenticationError("Invalid or expired token")
        return RequestContext(user_id=document.id, username=document.username, email=document.email)

    def _issue(self, document: UserDocument) -> AuthResponse:
        token = create_access_token(
            document.id,
            self._settings.secret_key,
            algorithm=self._settings.token_algorithm,
            ttl=timedelta(hours=self._settings.token_ttl_hours),
        )
        return AuthResponse(
            ok=True,
            user=AuthUser(
                id=document.id,
                username=document.username,
                email=document.email,
                role=document.role,
                token=token,
            ),
        )
