import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from healthhub.exceptions.handlers import (
    application_exception_handler,
    http_exception_handler,
    validation_exception_handler,
    generic_exception_handler
)
from healthhub.exceptions.errors import ApplicationException
from starlette.exceptions import HTTPException as StarletteHTTPException
from fastapi.exceptions import RequestValidationError
from healthhub.core.config import settings
from healthhub.database.base import Base
from healthhub.database.connection import engine
import healthhub.models  # noqa: F401  (registers tables on Base.metadata)

from healthhub.api.v1.routes import metric_router, provider_router, health_router

from healthhub.core.logger import get_logger

logger = get_logger("healthhub-backend")

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("HealthHub API is starting...")
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Metric tables ensured.")
    except Exception as e:
        logger.error(f"Failed to initialize application: {e}")
        raise

    yield

    await engine.dispose()
    logger.info("HealthHub API is shutting down...")


app = FastAPI(
    title="HealthHub Backend",
    version="1.0.0",
    lifespan=lifespan,
    description="""
    Per-user biometric time series aggregated from wearable and health-platform providers.

    ## Reading a metric

    `GET /metric/{metric_name}?from=<rfc3339>&to=<rfc3339>` with the caller's user id in
    the `X-User-Id` header. Both bounds are optional and inclusive.
    """,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.server.cors_origins,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(metric_router)
app.include_router(provider_router)
app.include_router(health_router)

# Exception handlers
app.add_exception_handler(ApplicationException, application_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)

if __name__ == "__main__":
    uvicorn.run(
        "healthhub.main:app",
        host=settings.server.host,
        port=settings.server.port,
        limit_concurrency=settings.database.max_connections * 2,
        timeout_keep_alive=30,
        timeout_graceful_shutdown=30
    )
