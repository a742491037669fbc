"""
SupplyMatch — Supplier matching & scoring API.

Thin HTTP surface over the services: every request carries its own supplier
catalog, part spec, filters or weights; nothing is stored between calls.
"""
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException

from .config import get_settings
from .logging_config import setup_logging
from .rate_limit import limiter
from .routers import bom, filters, matching, weighting
from .schemas.errors import ErrorResponse

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info(f"{settings.app_name} {settings.app_version} ready")
    yield


app = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=lifespan)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

app.include_router(matching.router)
app.include_router(filters.router)
app.include_router(weighting.router)
app.include_router(bom.router)


@app.middleware("http")
async def request_context(request: Request, call_next):
    request_id = uuid.uuid4().hex[:8]
    request.state.request_id = request_id
    start = time.perf_counter()
    with logger.contextualize(request_id=request_id):
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.debug(f"{request.method} {request.url.path} → {response.status_code} ({elapsed_ms:.1f} ms)")
    response.headers["X-Request-ID"] = request_id
    return response


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "")


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    body = ErrorResponse(error=str(exc.detail), status_code=exc.status_code, request_id=_request_id(request))
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(), headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info(f"Validation failed on {request.url.path}: {len(exc.errors())} error(s)")
    body = ErrorResponse(
        error="Validation error",
        status_code=422,
        request_id=_request_id(request),
        detail=[{"loc": list(e.get("loc", ())), "msg": e.get("msg", ""), "type": e.get("type", "")} for e in exc.errors()],
    )
    return JSONResponse(status_code=422, content=body.model_dump())


@app.get("/health")
def health():
    return {"status": "ok", "version": settings.app_version}
