# helpdesk/core/errors.py
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class UsernameTakenError(Exception):
    def __init__(self, username: str):
        super().__init__(f"Username already exists: {username}")
        self.username = username


def _describe(error: dict) -> str:
    # loc looks like ("body", "customerEmail") or ("path", "id")
    loc = [str(part) for part in error.get("loc", ()) if part != "body"]
    field = ".".join(loc)
    return f"{field}: {error['msg']}" if field else error["msg"]


async def validation_error_handler(request: Request, exc: RequestValidationError):
    message = "; ".join(_describe(e) for e in exc.errors()) or "Invalid request"
    return JSONResponse(status_code=400, content={"message": message})


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
