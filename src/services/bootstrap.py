"""Wire up all layers into a ready-to-use service."""

from typing import Optional

from src.core.config import Settings, get_settings
from src.core.logging_setup import configure_logging, get_logger
from src.db.database import build_engine, build_session_factory, init_db
from src.db.sql_repository import SQLGameRepository
from src.services.broadcast import InMemoryBroadcaster
from src.services.chess_service import ChessService

logger = get_logger(__name__)


def bootstrap(settings: Optional[Settings] = None) -> ChessService:
    """logging -> database engine + tables -> repository -> broadcaster -> service"""
    settings = settings or get_settings()
    configure_logging(settings)

    engine = build_engine(settings)
    init_db(engine)
    session = build_session_factory(engine)()

    service = ChessService(SQLGameRepository(session), InMemoryBroadcaster())
    logger.info("service_ready", database_url=engine.url.render_as_string(hide_password=True))
    return service
