import logging
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from eduai_api.api.actions import router as actions_router
from eduai_api.core.config import get_settings
from eduai_api.core.logging import configure_logging
from eduai_api.services.learning.error_policy import (
    bad_request,
    build_http_error_payload,
    build_unexpected_error_payload,
    invalid_fields_message,
)


settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="EduAI Roadmap API",
    version="0.1.0",
    description="Learning roadmap and lesson generation backed by multiple AI providers",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health_check() -> dict[str, str]:
    return {"status": "ok", "env": settings.env}


@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    trace_id = request.headers.get("x-trace-id") or uuid4().hex
    payload = build_http_error_payload(exc, trace_id)
    if exc.status_code >= 500:
        logger.error("Request %s failed [%s]: %s", request.url.path, trace_id, payload["detail"])
    return JSONResponse(status_code=exc.status_code, content=payload)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return await handle_http_exception(request, bad_request(invalid_fields_message(exc.errors())))


@app.exception_handler(Exception)
async def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
    trace_id = request.headers.get("x-trace-id") or uuid4().hex
    logger.exception("Unexpected error on %s [%s]", request.url.path, trace_id, exc_info=exc)
    payload = build_unexpected_error_payload(trace_id)
    return JSONResponse(status_code=500, content=payload)


app.include_router(actions_router)


def run() -> None:
    import uvicorn

    uvicorn.run("eduai_api.main:app", host=settings.api_host, port=settings.api_port)
