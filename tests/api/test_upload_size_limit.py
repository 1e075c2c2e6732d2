"""
Tests for the upload body limit applied before the multipart parser runs
"""

import asyncio
import json

import pytest
from starlette.exceptions import HTTPException

from clipshare.api.middleware import UploadSizeLimitMiddleware

LIMIT = 100


def http_scope(method="POST", path="/upload-video", content_length=None):
    headers = [(b"content-type", b"multipart/form-data; boundary=x")]
    if content_length is not None:
        headers.append((b"content-length", str(content_length).encode()))
    return {"type": "http", "method": method, "path": path, "headers": headers}


class ChunkedBody:
    """receive() callable handing out body chunks and counting pulls"""

    def __init__(self, chunks):
        self.chunks = list(chunks)
        self.pulls = 0

    async def __call__(self):
        self.pulls += 1
        chunk = self.chunks.pop(0)
        return {"type": "http.request", "body": chunk, "more_body": bool(self.chunks)}


class DrainingApp:
    """Inner app that reads the whole body, as the form parser does"""

    def __init__(self):
        self.called = False
        self.body = b""

    async def __call__(self, scope, receive, send):
        self.called = True
        while True:
            message = await receive()
            self.body += message.get("body", b"")
            if not message.get("more_body"):
                break
        await send({"type": "http.response.start", "status": 200, "headers": []})
        await send({"type": "http.response.body", "body": b""})


def run(middleware, scope, receive):
    sent = []

    async def send(message):
        sent.append(message)

    asyncio.run(middleware(scope, receive, send))
    return sent


class TestUploadSizeLimitMiddleware:

    def test_declared_length_over_limit_is_rejected_unread(self):
        inner = DrainingApp()
        body = ChunkedBody([b"a" * 50] * 10)

        sent = run(UploadSizeLimitMiddleware(inner, max_body_bytes=LIMIT), http_scope(content_length=500), body)

        assert not inner.called
        assert body.pulls == 0
        assert sent[0]["status"] == 413
        assert json.loads(sent[1]["body"]) == {"message": "File too large."}

    def test_undeclared_body_is_cut_off_once_over_limit(self):
        inner = DrainingApp()
        body = ChunkedBody([b"a" * 40] * 10)

        with pytest.raises(HTTPException) as exc_info:
            run(UploadSizeLimitMiddleware(inner, max_body_bytes=LIMIT), http_scope(), body)

        assert exc_info.value.status_code == 413
        assert exc_info.value.detail == "File too large."
        assert body.pulls == 3
        assert len(body.chunks) == 7

    def test_understated_length_is_still_cut_off(self):
        inner = DrainingApp()
        body = ChunkedBody([b"a" * 60] * 4)

        with pytest.raises(HTTPException):
            run(UploadSizeLimitMiddleware(inner, max_body_bytes=LIMIT), http_scope(content_length=10), body)

        assert body.pulls == 2

    def test_body_at_limit_passes_through(self):
        inner = DrainingApp()
        body = ChunkedBody([b"a" * 50, b"b" * 50])

        sent = run(UploadSizeLimitMiddleware(inner, max_body_bytes=LIMIT), http_scope(content_length=100), body)

        assert inner.body == b"a" * 50 + b"b" * 50
        assert sent[0]["status"] == 200

    @pytest.mark.parametrize("method,path", [("GET", "/upload-video"), ("POST", "/signup")])
    def test_other_requests_are_untouched(self, method, path):
        inner = DrainingApp()
        body = ChunkedBody([b"a" * 500])

        sent = run(UploadSizeLimitMiddleware(inner, max_body_bytes=LIMIT),
                   http_scope(method=method, path=path, content_length=500), body)

        assert inner.body == b"a" * 500
        assert sent[0]["status"] == 200
