# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
FastAPI application factory.

Responsibilities
----------------
* Instantiate the FastAPI app.
* Register CORS middleware for the single-page frontend.
* Map the error taxonomy (core.errors), request validation failures and
  persistence errors onto JSON responses; anything else becomes a logged
  500 with a generic body.
* Mount the three feature routers (auth, blogs, admin).
* Expose a /health endpoint for container liveness checks.

Run with:
    uvicorn main:app --app-dir backend
"""

import time

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import BaseHTTPMiddleware

from auth.router import router as auth_router
from blogs.router import router as blogs_router
from admin.router import router as admin_router
from core.config import settings
from core.errors import AppError, ServerFault, ValidationError
from core.logger import logger

app = FastAPI(title="Midnight Blog", version="1.0.0")

# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------
# The frontend runs on its own origin (Vite dev server by default); the list
# comes from settings.cors_origins.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Authorization", "Content-Type"],
)


# ---------------------------------------------------------------------------
# Request-logging middleware
# ---------------------------------------------------------------------------
# Logs every inbound request: method, path, client IP, status, latency.
# Bodies (signin payloads, passwords) are NOT echoed – only the URL and
# metadata are recorded.


class _RequestLogMiddleware(BaseHTTPMiddleware):
    """Log method, path, client IP, response status and latency (ms)."""

    async def dispatch(self, request: Request, call_next) -> Response:
        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000

        client_ip = request.client.host if request.client else "unknown"

        logger.info(
            "%s %s | client=%s status=%d latency=%.1fms",
            request.method,
            request.url.path,
            client_ip,
            response.status_code,
            elapsed_ms,
        )
        return response


app.add_middleware(_RequestLogMiddleware)


# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------


@app.exception_handler(RequestValidationError)
async def _request_validation_handler(request: Request, exc: RequestValidationError):
    """One ``{field, msg}`` entry per violated field, served as 400."""
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err["loc"] if part not in ("body", "query", "path")]
        errors.append({"field": ".".join(loc), "msg": err["msg"]})
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Validation failed", "errors": errors},
    )


@app.exception_handler(AppError)
async def _app_error_handler(request: Request, exc: AppError):
    content = {"detail": exc.detail}
    if isinstance(exc, ValidationError):
        content["errors"] = exc.errors
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


def _server_fault(kind: str, request: Request, exc: Exception) -> JSONResponse:
    # Messages can carry SQL, values or internals; they stay in the log.
    logger.error("%s on %s %s", kind, request.method, request.url.path, exc_info=exc)
    fault = ServerFault()
    return JSONResponse(status_code=fault.status_code, content={"detail": fault.detail})


@app.exception_handler(SQLAlchemyError)
async def _persistence_error_handler(request: Request, exc: SQLAlchemyError):
    return _server_fault("persistence error", request, exc)


@app.exception_handler(Exception)
async def _unhandled_error_handler(request: Request, exc: Exception):
    return _server_fault("unhandled error", request, exc)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
app.include_router(auth_router)
app.include_router(blogs_router)
app.include_router(admin_router)

# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------


@app.on_event("startup")
async def _on_startup():
    logger.info("Midnight Blog service starting up")


@app.on_event("shutdown")
async def _on_shutdown():
    logger.info("Midnight Blog service shutting down")


@app.get("/health")
def health():
    return {"status": "ok"}
