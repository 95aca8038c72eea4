from dataclasses import dataclass

from src.meredith.core.services import DbSessionService, JwtService


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
    jwt_service: JwtService
