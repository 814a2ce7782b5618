from dataclasses import dataclass
from typing import Optional

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from app.core.config import Settings
from app.core.database import create_db_engine, create_session_factory
from app.core.security import TokenService
from app.services.storage import StorageService


@dataclass
class AppContext:
    """Everything a request needs that outlives the request.

    Built once by ``create_app`` and stored on ``app.state.context``.
    """
    settings: Settings
    engine: Engine
    session_factory: sessionmaker
    token_service: TokenService
    storage: StorageService

    @classmethod
    def from_settings(cls, settings: Settings, engine: Optional[Engine] = None) -> "AppContext":
        engine = engine or create_db_engine(settings.DATABASE_URL)
        return cls(
            settings=settings,
            engine=engine,
            session_factory=create_session_factory(engine),
            token_service=TokenService(
                secret_key=settings.SECRET_KEY,
                algorithm=settings.ALGORITHM,
                expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
            ),
            storage=StorageService(settings),
        )
