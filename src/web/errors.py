"""Uniform fail envelope for every error response."""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from inference.diagnosis import PredictionError

logger = structlog.get_logger()

DEFAULT_ERROR_MESSAGE = "Internal Server Error"


def fail_response(status_code: int, message: str | None, headers: dict | None = None) -> JSONResponse:
    """Build ``{status: "fail", message}`` keeping the given status code."""
    return JSONResponse(
        status_code=status_code,
        content={"status": "fail", "message": message or DEFAULT_ERROR_MESSAGE},
        headers=headers,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    detail = exc.detail if isinstance(exc.detail, str) else None
    return fail_response(exc.status_code, detail, headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = errors[0].get("msg") if errors else None
    return fail_response(400, message)


async def prediction_error_handler(request: Request, exc: PredictionError) -> JSONResponse:
    return fail_response(400, exc.message)


class UnhandledErrorMiddleware:
    """Render uncaught exceptions as a 500 fail envelope.

    Installed inside CORSMiddleware so 500s carry the CORS headers.
    """

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception:
            logger.exception("web.unhandled_error", path=scope["path"], method=scope["method"])
            if response_started:
                raise
            response = fail_response(500, DEFAULT_ERROR_MESSAGE)
            await response(scope, receive, send)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(PredictionError, prediction_error_handler)
