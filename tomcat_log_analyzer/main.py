import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from starlette.formparsers import MultiPartParser

from tomcat_log_analyzer.core.config import settings
from tomcat_log_analyzer.core.exceptions import (
    FileTooLargeError,
    InvalidRequestError,
    LogAnalyzerError,
    NoActiveFileError,
)
from tomcat_log_analyzer.core.logging_config import setup_logging

# Raise the per-part size limit for multipart uploads (default is 1 MB)
MultiPartParser.max_part_size = settings.MAX_UPLOAD_MB * 1024 * 1024
from tomcat_log_analyzer.routes.logs import router as logs_router
from tomcat_log_analyzer.routes.analysis import router as analysis_router

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Tomcat Log Analyzer")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = round((time.perf_counter() - start) * 1000, 2)
        logger.info(
            "%s %s -> %s (%.2fms)",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )
        return response


app.add_middleware(RequestLoggingMiddleware)

app.include_router(logs_router)
app.include_router(analysis_router)


def _error_body(exc: Exception, detail: str) -> dict:
    return {"status": "error", "detail": detail, "type": type(exc).__name__}


@app.exception_handler(FileTooLargeError)
async def file_too_large_handler(request: Request, exc: FileTooLargeError):
    return JSONResponse(status_code=413, content=_error_body(exc, exc.detail))


@app.exception_handler(InvalidRequestError)
async def invalid_request_handler(request: Request, exc: InvalidRequestError):
    return JSONResponse(status_code=400, content=_error_body(exc, exc.detail))


@app.exception_handler(NoActiveFileError)
async def no_active_file_handler(request: Request, exc: NoActiveFileError):
    return JSONResponse(status_code=409, content=_error_body(exc, exc.detail))


@app.exception_handler(LogAnalyzerError)
async def log_analyzer_error_handler(request: Request, exc: LogAnalyzerError):
    # Read/write failures: keep the cause in our logs, not in the response
    logger.error(
        "%s on %s %s", type(exc).__name__, request.method, request.url.path,
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content=_error_body(exc, exc.detail))


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "type": type(exc).__name__,
        },
    )


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/")
def root():
    return {
        "message": "Tomcat Log Analyzer API is running",
        "docs": "/docs",
        "health": "/health",
    }
