import logging
import time
import uuid

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from concierge.api import care, chat, personas
from concierge.config import get_settings
from concierge.services.personas import DEFAULT_REGISTRY
from concierge.telemetry import log_event, text_caps

_settings = get_settings()

logging.basicConfig(
    level=getattr(logging, _settings.log_level, logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger("concierge")

app = FastAPI(title="Med Spa Concierge API", version="0.1.0")

# Read-only persona catalog shared by every request
app.state.registry = DEFAULT_REGISTRY

app.include_router(chat.router)
app.include_router(personas.router)
app.include_router(care.router)


def _request_id(request: Request) -> str:
    rid = getattr(request.state, "request_id", None)
    return rid or request.headers.get("x-request-id") or str(uuid.uuid4())


@app.exception_handler(RequestValidationError)
async def on_validation_error(request: Request, exc: RequestValidationError):
    log_event(
        logger,
        "request_validation_error",
        level=logging.WARNING,
        errors=[{"loc": list(e.get("loc", ())), "type": e.get("type")} for e in exc.errors()],
        requestId=_request_id(request),
        path=request.url.path,
    )
    return JSONResponse(status_code=400, content={"error": "Invalid request"})


@app.exception_handler(HTTPException)
async def on_http_exception(request: Request, exc: HTTPException):
    log_event(
        logger,
        "http_exception",
        level=logging.WARNING,
        caps=text_caps(_settings.log_body_max),
        status=exc.status_code,
        detail=exc.detail,
        requestId=_request_id(request),
        path=request.url.path,
    )
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=exc.headers)


@app.exception_handler(Exception)
async def on_unhandled_exception(request: Request, exc: Exception):
    logger.exception("Unhandled application exception: %s", exc)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error"},
        headers={"x-request-id": _request_id(request)},
    )


@app.middleware("http")
async def log_requests(request: Request, call_next):
    req_id = request.headers.get("x-request-id") or str(uuid.uuid4())
    request.state.request_id = req_id
    start = time.time()

    # Bodies carry health details; only method/path/size are logged
    log_event(
        logger,
        "request_start",
        method=request.method,
        path=request.url.path,
        requestId=req_id,
        bodySize=request.headers.get("content-length", "0"),
    )

    response = await call_next(request)
    response.headers["x-request-id"] = req_id

    status = response.status_code
    log_event(
        logger,
        "request_end",
        level=logging.ERROR if status >= 500 else logging.WARNING if status >= 400 else logging.INFO,
        method=request.method,
        path=request.url.path,
        status=status,
        latencyMs=int((time.time() - start) * 1000),
        requestId=req_id,
    )
    return response


@app.get("/healthz")
async def healthz():
    return {"status": "ok"}
