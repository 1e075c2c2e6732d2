"""
Request body limit for upload routes, enforced while the body arrives
"""

import logging
from typing import Iterable

from starlette.exceptions import HTTPException
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)

TOO_LARGE = "File too large."


class UploadSizeLimitMiddleware:
    """
    Rejects an upload request whose declared Content-Length exceeds the
    limit before reading any of it, and aborts a body without a usable
    Content-Length once more than the limit has been received.
    """

    def __init__(self, app: ASGIApp, max_body_bytes: int, paths: Iterable[str] = ("/upload-video",)):
        self.app = app
        self.max_body_bytes = max_body_bytes
        self.paths = frozenset(paths)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope["method"] != "POST" or scope["path"] not in self.paths:
            await self.app(scope, receive, send)
            return

        content_length = self._content_length(scope)
        if content_length is not None and content_length > self.max_body_bytes:
            logger.info(f"Upload rejected: Content-Length {content_length} over limit")
            response = JSONResponse(status_code=413, content={"message": TOO_LARGE})
            await response(scope, receive, send)
            return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_bytes:
                    logger.info(f"Upload rejected: body passed {self.max_body_bytes} bytes while streaming")
                    raise HTTPException(status_code=413, detail=TOO_LARGE)
            return message

        await self.app(scope, limited_receive, send)

    @staticmethod
    def _content_length(scope: Scope):
        for name, value in scope.get("headers", []):
            if name == b"content-length":
                try:
                    return int(value)
                except ValueError:
                    return None
        return None
