from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.exceptions import MarketplaceError, AuthenticationError
from app.core.logger import logger


def _field_errors(exc: RequestValidationError) -> dict:
    errors = {}
    for error in exc.errors():
        # loc is ("body", "phone") for JSON bodies
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc) or "body"
        errors.setdefault(field, error.get("msg", "Invalid value"))
    return errors


def add_exception_handlers(app: FastAPI):
    @app.exception_handler(MarketplaceError)
    async def marketplace_exception_handler(request: Request, exc: MarketplaceError):
        content = {"message": exc.message}
        if exc.errors:
            content["errors"] = exc.errors
        headers = None
        if isinstance(exc, AuthenticationError):
            headers = {"WWW-Authenticate": "Bearer"}
        return JSONResponse(status_code=exc.status_code, content=content, headers=headers)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=422,
            content={
                "message": "The given data was invalid.",
                "errors": _field_errors(exc),
            },
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled exception: {exc} | "
            f"Method: {request.method} | "
            f"Path: {request.url.path}",
            exc_info=exc,
        )
        return JSONResponse(
            status_code=500,
            content={"message": "An internal error occurred. Please try again later."},
        )
