"""Error taxonomy and the handlers that turn it into JSON responses."""
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    status_code = 500

    def __init__(self, message: str, status: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status = status

    def body(self) -> dict:
        if self.status:
            return {"status": self.status, "message": self.message}
        return {"message": self.message}


class BadRequest(GatewayError):
    status_code = 400


class Unauthorized(GatewayError):
    status_code = 401


class NotFound(GatewayError):
    status_code = 404


class StorageFailure(GatewayError):
    status_code = 500


class MultipartError(Exception):
    """Raised while collecting multipart files (limits, unexpected fields)."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field


class UnsupportedFileType(Exception):
    def __init__(self, content_type: Optional[str] = None):
        super().__init__("Unsupported file type")
        self.content_type = content_type


async def gateway_error_handler(request: Request, exc: GatewayError):
    logger.warning("%s %s (%d): %s", request.method, request.url.path,
                   exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.body())


async def multipart_error_handler(request: Request, exc: MultipartError):
    logger.warning("Multipart error on %s (field %s): %s",
                   request.url.path, exc.field, exc.message)
    return JSONResponse(status_code=400, content={"message": exc.message})


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # Starlette raises 400 here for malformed multipart bodies
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


class CatchAllExceptionMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error(f"{type(exc).__name__} on {request.url.path} (500): {exc}", exc_info=True)
            return JSONResponse(status_code=500, content={"message": str(exc)})


def install_error_handlers(app: FastAPI):
    app.add_exception_handler(GatewayError, gateway_error_handler)
    app.add_exception_handler(MultipartError, multipart_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_middleware(CatchAllExceptionMiddleware)
