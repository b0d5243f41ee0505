"""
Request body size limit.

Base64 images travel inside the JSON body, so the limit is enforced both on
the declared Content-Length and on the bytes actually received, which also
covers chunked uploads that carry no Content-Length.
"""
from fastapi import HTTPException
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

TOO_LARGE = "Request body too large"


class BodySizeLimitMiddleware:
    """ASGI middleware rejecting bodies larger than `settings["max_body_bytes"]`."""

    def __init__(self, app, settings):
        self.app = app
        self.settings = settings

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        max_bytes = int(self.settings["max_body_bytes"])
        headers = dict(scope.get("headers") or [])
        length = headers.get(b"content-length", b"").decode("latin-1")
        if length.isdigit() and int(length) > max_bytes:
            await self._reject(scope, receive, send)
            return

        received = 0
        response_started = False

        async def limited_receive():
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > max_bytes:
                    raise HTTPException(status_code=413, detail=TOO_LARGE)
            return message

        async def tracked_send(message):
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, limited_receive, tracked_send)
        except StarletteHTTPException as exc:
            if exc.status_code != 413 or response_started:
                raise
            await self._reject(scope, receive, send)

    @staticmethod
    async def _reject(scope, receive, send):
        response = JSONResponse(status_code=413, content={"message": TOO_LARGE})
        await response(scope, receive, send)
