"""Request body size guard for upload routes.

Pure ASGI middleware so oversized bodies are rejected before FastAPI parses
the multipart form. Declared Content-Length is checked up front; chunked
bodies are buffered and counted.
"""

import json

import structlog
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = structlog.get_logger()


def _too_large_message(max_bytes: int) -> str:
    return f"Payload content length greater than maximum allowed: {max_bytes}"


class PayloadLimitMiddleware:
    def __init__(self, app: ASGIApp, max_bytes: int, paths: tuple[str, ...] = ("/predict",)):
        self.app = app
        self.max_bytes = max_bytes
        self.paths = set(paths)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if (
            scope["type"] != "http"
            or scope["method"] != "POST"
            or scope["path"].rstrip("/") not in self.paths
        ):
            await self.app(scope, receive, send)
            return

        headers = dict(scope.get("headers") or [])
        declared = headers.get(b"content-length")
        if declared is not None:
            try:
                length = int(declared)
            except ValueError:
                length = None
            if length is not None and length > self.max_bytes:
                await self._reject(scope, send, length)
                return
            if length is not None:
                await self.app(scope, receive, send)
                return

        # No usable Content-Length: buffer and count.
        chunks: list[bytes] = []
        received = 0
        more_body = True
        while more_body:
            message = await receive()
            if message["type"] == "http.disconnect":
                return
            body = message.get("body", b"")
            received += len(body)
            if received > self.max_bytes:
                await self._reject(scope, send, received)
                return
            chunks.append(body)
            more_body = message.get("more_body", False)

        replayed = False

        async def replay() -> Message:
            nonlocal replayed
            if not replayed:
                replayed = True
                return {"type": "http.request", "body": b"".join(chunks), "more_body": False}
            return await receive()

        await self.app(scope, replay, send)

    async def _reject(self, scope: Scope, send: Send, size: int) -> None:
        logger.info("request.too_large", path=scope["path"], size=size, limit=self.max_bytes)
        body = json.dumps(
            {"status": "fail", "message": _too_large_message(self.max_bytes)}
        ).encode()
        await send(
            {
                "type": "http.response.start",
                "status": 413,
                "headers": [
                    (b"content-type", b"application/json"),
                    (b"content-length", str(len(body)).encode()),
                ],
            }
        )
        await send({"type": "http.response.body", "body": body})
