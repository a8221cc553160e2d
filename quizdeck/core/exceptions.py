import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Internal server error."


class QuizValidationError(HTTPException):
    """Malformed or semantically invalid request payload."""

    def __init__(self, message: str):
        super().__init__(status_code=400, detail=message)


class ModuleNotFound(HTTPException):
    def __init__(self, module_name: str):
        super().__init__(status_code=404, detail=f"Module '{module_name}' not found or has no questions.")


class InternalError(HTTPException):
    def __init__(self, message: str = GENERIC_ERROR_MESSAGE):
        super().__init__(status_code=500, detail=message)


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request body."
    first = errors[0]
    if first.get("type") == "json_invalid":
        return "Request body is not valid JSON."
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    if location:
        return f"Invalid request body at '{location}': {first.get('msg')}"
    return f"Invalid request body: {first.get('msg')}"


async def http_exception_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail}, headers=exc.headers)


async def validation_exception_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"message": _describe_validation_error(exc)})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"message": GENERIC_ERROR_MESSAGE})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
