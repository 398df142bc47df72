"""Generate database session"""

from typing import Optional

from sqlalchemy import Engine, StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import Settings, get_settings
from src.db.schema import Base


def build_engine(settings: Optional[Settings] = None) -> Engine:
    settings = settings or get_settings()
    connect_args = (
        {"check_same_thread": False}
        if settings.database_url.startswith("sqlite")
        else {}
    )
    # an in-memory database lives only as long as its single connection
    pool_args = {"poolclass": StaticPool} if ":memory:" in settings.database_url else {}
    return create_engine(
        settings.database_url,
        echo=settings.echo_sql,
        connect_args=connect_args,
        **pool_args,
    )


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(autoflush=False, bind=engine)


def init_db(engine: Engine) -> None:
    """Ensure all tables are created"""
    Base.metadata.create_all(bind=engine)

