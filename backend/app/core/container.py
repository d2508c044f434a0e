from __future__ import annotations

from dataclasses import dataclass

from backend.app.core.config import Settings
from backend.app.services.actor_service import ActorService
from backend.app.services.auth_service import AuthService
from backend.app.services.employment_service import EmploymentService
from backend.app.services.integrity_service import IntegrityService
from backend.app.services.performance_service import PerformanceService
from backend.app.services.user_service import UserService
from backend.app.storage.db import Database
from backend.app.storage.repositories.actor_repository import ActorRepository
from backend.app.storage.repositories.employment_repository import EmploymentRepository
from backend.app.storage.repositories.performance_repository import PerformanceRepository
from backend.app.storage.repositories.user_repository import UserRepository


@dataclass(slots=True)
class AppContainer:
    settings: Settings
    database: Database
    actor_repository: ActorRepository
    performance_repository: PerformanceRepository
    employment_repository: EmploymentRepository
    user_repository: UserRepository
    integrity_service: IntegrityService
    actor_service: ActorService
    performance_service: PerformanceService
    employment_service: EmploymentService
    user_service: UserService
    auth_service: AuthService
