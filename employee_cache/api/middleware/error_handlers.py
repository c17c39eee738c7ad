import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

from employee_cache.exceptions import InvalidEmployeeId, RecordNotFound, UpstreamTransportError

logger = logging.getLogger(__name__)


async def handle_validation_error(request: Request, exc: RequestValidationError):
    errors = {}
    for error in exc.errors():
        # ("body", "salary") -> "salary"
        field = ".".join(str(p) for p in error.get("loc", ()) if p != "body") or "body"
        errors[field] = error.get("msg", "invalid value")
    logger.error(f"Validation errors: {errors}")
    return JSONResponse(status_code=400, content=errors)


async def handle_not_found(request: Request, exc: RecordNotFound):
    return JSONResponse(status_code=404, content={"error": "The requested employee was not found."})


async def handle_upstream_error(request: Request, exc: UpstreamTransportError):
    logger.error(f"Upstream failure on {request.method} {request.url.path}: {exc} (status={exc.status_code})")
    return JSONResponse(
        status_code=502,
        content={"error": "The external service is currently unavailable. Please try again later."},
    )


async def handle_invalid_id(request: Request, exc: InvalidEmployeeId):
    return JSONResponse(status_code=400, content={"error": str(exc)})


async def handle_unexpected(request: Request, exc: Exception):
    logger.exception("Unexpected error occurred", exc_info=exc)
    return PlainTextResponse(status_code=500, content="Something went wrong. Please try again later.")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(RecordNotFound, handle_not_found)
    app.add_exception_handler(UpstreamTransportError, handle_upstream_error)
    app.add_exception_handler(InvalidEmployeeId, handle_invalid_id)
    app.add_exception_handler(Exception, handle_unexpected)
