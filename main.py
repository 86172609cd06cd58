import sys
import time
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from loguru import logger
from prometheus_client import make_asgi_app

from core.config import settings
from core.exceptions import JobExtractorException, ValidationError
from services.extraction.pipeline import ExtractionPipeline, PipelineConfig
from api.v1.endpoints import extraction, proxy

logger.remove()
logger.add(sys.stderr, level=settings.LOG_LEVEL.upper())

# Prometheus metrics endpoint
metrics_app = make_asgi_app()


# ------------------------------------------------------------------
# FastAPI App Lifecycle
# ------------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Initializing application...")

    # One client for upstream page fetches (/proxy) and for the pipeline
    app.state.http_client = httpx.AsyncClient()
    app.state.pipeline = ExtractionPipeline(
        PipelineConfig.from_settings(settings), client=app.state.http_client
    )
    try:
        yield
    finally:
        logger.info("Shutting down application...")
        await app.state.pipeline.cleanup()
        await app.state.http_client.aclose()


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Fetch proxy and AI job-posting extraction",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_HOSTS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(
    TrustedHostMiddleware,
    allowed_hosts=settings.ALLOWED_HOSTS,
)

app.include_router(proxy.router, tags=["proxy"])
app.include_router(extraction.router, prefix="/api/v1", tags=["extraction"])


@app.middleware("http")
async def add_timing_header(request: Request, call_next):
    start_time = time.perf_counter()
    response = await call_next(request)
    process_time = time.perf_counter() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    return response


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=ValidationError(errors=jsonable_encoder(exc.errors())).to_dict(),
    )


@app.exception_handler(JobExtractorException)
async def extractor_exception_handler(request: Request, exc: JobExtractorException):
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {str(exc)}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "INTERNAL_SERVER_ERROR",
                "message": "An unexpected error occurred",
                "status": 500,
            }
        },
    )


app.mount("/metrics", metrics_app)


@app.get("/", response_class=PlainTextResponse)
async def root():
    return "Job Tracker Backend is running!"


@app.get("/health")
async def health_check():
    return {"status": "healthy", "timestamp": time.time()}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.DEBUG,
        workers=settings.WORKERS,
        log_level=settings.LOG_LEVEL.lower(),
    )
