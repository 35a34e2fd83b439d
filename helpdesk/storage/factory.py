# helpdesk/storage/factory.py
import logging

from helpdesk.core.config import Settings
from helpdesk.core.database import build_engine, build_session_factory
from helpdesk.storage.base import Clock, Storage
from helpdesk.storage.database import DatabaseStorage
from helpdesk.storage.memory import MemoryStorage

logger = logging.getLogger(__name__)


def build_storage(settings: Settings, clock: Clock | None = None) -> Storage:
    if settings.STORAGE_BACKEND == "memory":
        logger.info("Using in-memory storage, data is lost on restart")
        return MemoryStorage(clock=clock)

    engine = build_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)
    logger.info("Using database storage at %s", engine.url.render_as_string(hide_password=True))
    return DatabaseStorage(build_session_factory(engine), clock=clock)
