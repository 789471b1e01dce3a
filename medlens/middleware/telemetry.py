"""Request metrics, including the analysis failure code behind error responses."""

from __future__ import annotations

import time
from typing import Any

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from medlens.telemetry import increment_error_response, observe_request

ERROR_CODE_HEADER = "X-Analysis-Error-Code"
"""Set by the ``AnalysisError`` handler so failures can be counted per kind."""


class TelemetryMiddleware(BaseHTTPMiddleware):
    """Record latency per route and count error responses by failure code."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:  # pragma: no cover - defensive
            observe_request(
                request.method,
                self._resolve_route(request),
                500,
                time.perf_counter() - start_time,
            )
            raise

        route = self._resolve_route(request)
        observe_request(
            request.method,
            route,
            response.status_code,
            time.perf_counter() - start_time,
        )

        error_code = response.headers.get(ERROR_CODE_HEADER)
        if error_code:
            increment_error_response(route, error_code)
        return response

    @staticmethod
    def _resolve_route(request: Request) -> str:
        """Prefer the matched route template so ids never become labels."""

        scope_route: Any = request.scope.get("route")
        path = getattr(scope_route, "path", None)
        return path or request.url.path
