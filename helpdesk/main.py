# helpdesk/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from helpdesk.core.config import Settings, get_settings
from helpdesk.core.errors import register_error_handlers
from helpdesk.core.logging_config import setup_logging
from helpdesk.issue.routes import router as issue_router
from helpdesk.storage.base import Storage
from helpdesk.storage.factory import build_storage

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, storage: Storage | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESC,
        version=settings.APP_VERSION,
    )
    app.state.settings = settings
    app.state.storage = storage or build_storage(settings)

    origins = settings.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Browsers reject credentials with a wildcard origin
        allow_credentials=origins != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    # Routers
    app.include_router(issue_router)

    @app.get("/health", tags=["Health"])
    def health():
        return {"status": "ok", "storage": app.state.storage.backend}

    logger.info("%s %s ready (storage=%s)", settings.APP_NAME, settings.APP_VERSION, app.state.storage.backend)
    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("helpdesk.main:app", host=settings.HOST, port=settings.PORT)
