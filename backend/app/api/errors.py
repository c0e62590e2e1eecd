from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.auth import UNAUTHORIZED_MESSAGE, get_auth_service
from app.utils.logs import get_logger

log = get_logger("http")

PROTECTED_PREFIX = "/api/products"
INTERNAL_ERROR = "Internal server error"


def _describe(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    loc = [str(p) for p in first.get("loc", ()) if p != "body"]
    where = ".".join(loc)
    msg = first.get("msg", "invalid value")
    return f"Validation error: {where}: {msg}" if where else f"Validation error: {msg}"


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # a malformed body is parsed before route dependencies run, so the token
    # has to be checked here too for protected routes
    if request.url.path.startswith(PROTECTED_PREFIX):
        if not get_auth_service().authorize(request.headers.get("authorization")):
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"message": UNAUTHORIZED_MESSAGE},
                headers={"WWW-Authenticate": "Bearer"},
            )
    message = _describe(exc)
    log.info("%s %s rejected: %s", request.method, request.url.path, message)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": message})


async def unhandled_exception_handler(request: Request, exc: Exception):
    # details stay in the server log
    log.exception("%s %s failed", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": INTERNAL_ERROR},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
