# ABOUTME: Maps domain exceptions to HTTP responses.
# ABOUTME: Infrastructure faults are logged with their cause chain and returned as opaque 500s.

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from newsletter_desk.exceptions import (
    EmailError,
    StoreError,
    SubscriptionValidationError,
    UnknownTokenError,
)

log = structlog.get_logger()


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    log.info("request_rejected", path=request.url.path, errors=len(exc.errors()))
    return JSONResponse(status_code=400, content={"detail": "Bad Request"})


async def handle_subscription_validation_error(
    request: Request, exc: SubscriptionValidationError
) -> JSONResponse:
    log.info("subscription_rejected", path=request.url.path, reason=str(exc))
    return JSONResponse(status_code=400, content={"detail": str(exc)})


async def handle_unknown_token(request: Request, exc: UnknownTokenError) -> JSONResponse:
    return JSONResponse(status_code=401, content={"detail": str(exc)})


async def handle_server_fault(request: Request, exc: Exception) -> JSONResponse:
    log.error("request_failed", path=request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(SubscriptionValidationError, handle_subscription_validation_error)
    app.add_exception_handler(UnknownTokenError, handle_unknown_token)
    app.add_exception_handler(StoreError, handle_server_fault)
    app.add_exception_handler(EmailError, handle_server_fault)
