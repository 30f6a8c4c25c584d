from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from healthhub.exceptions.errors import ApplicationException, DecodeRangeError
import logging

logger = logging.getLogger(__name__)

async def application_exception_handler(request: Request, exc: ApplicationException):
    if isinstance(exc, DecodeRangeError):
        logger.error(
            f"Decode error on {request.url.path}: kind={exc.kind} value={exc.raw_value!r} {exc.reason}"
        )
    elif exc.status_code >= 500:
        logger.error(f"Application error on {request.url.path}: {exc.message} ({repr(exc.__cause__)})")
    else:
        logger.warning(f"Application error: {exc.message}")
    return exc.to_response()

async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail}
    )

async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.error(f"Validation error on {request.url.path}: {exc.errors()}")

    errors = []
    for error in exc.errors():
        errors.append({
            "type": error.get("type"),
            "loc": error.get("loc"),
            "msg": error.get("msg"),
            "input": str(error.get("input")) if error.get("input") is not None else None
        })

    return JSONResponse(
        status_code=422,
        content={
            "detail": errors,
            "url": str(request.url),
            "method": request.method
        }
    )

async def generic_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error: {repr(exc)}")
    return JSONResponse(
        status_code=500,
        content={"error": "An unexpected error occurred"}
    )
