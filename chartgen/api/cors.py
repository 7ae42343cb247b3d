"""Fixed cross-origin headers on every response, including pre-flight and errors."""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

ALLOWED_HEADERS = "authorization, x-client-info, apikey, content-type"


class FixedCORSMiddleware(BaseHTTPMiddleware):
    """Answer pre-flight probes with an empty body and stamp access headers on everything else."""

    def __init__(self, app: ASGIApp, allowed_origins: list[str] | None = None):
        super().__init__(app)
        self.allowed_origins = allowed_origins or ["*"]

    def access_headers(self, request: Request) -> dict[str, str]:
        if "*" in self.allowed_origins:
            return {
                "Access-Control-Allow-Origin": "*",
                "Access-Control-Allow-Headers": ALLOWED_HEADERS,
            }
        headers = {"Access-Control-Allow-Headers": ALLOWED_HEADERS, "Vary": "Origin"}
        origin = request.headers.get("origin")
        if origin and origin in self.allowed_origins:
            headers["Access-Control-Allow-Origin"] = origin
        return headers

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        headers = self.access_headers(request)
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=headers)

        response = await call_next(request)
        response.headers.update(headers)
        return response
