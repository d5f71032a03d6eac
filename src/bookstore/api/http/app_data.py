from dataclasses import dataclass

from src.bookstore.core.services import DbSessionService
from src.bookstore.runtime.config.config_data import ConfigData


@dataclass
class ApplicationDependencies:
    config: ConfigData
    database_service: DbSessionService
