"""
Request logging middleware for the Report Export API.

Logs method, path, status and duration of every request under /api/report/.
"""
import logging
import time

from asgiref.sync import iscoroutinefunction, markcoroutinefunction

logger = logging.getLogger(__name__)


class ReportAPILoggingMiddleware:
    """
    Middleware that logs Report Export API requests.

    Supports both sync and async request handling.
    """

    sync_capable = True
    async_capable = True

    def __init__(self, get_response):
        self.get_response = get_response
        self.is_async = iscoroutinefunction(get_response)
        if self.is_async:
            markcoroutinefunction(self)

    def __call__(self, request):
        if self.is_async:
            return self.__acall__(request)

        started = time.monotonic()
        response = self.get_response(request)
        self._log(request, response, started)
        return response

    async def __acall__(self, request):
        started = time.monotonic()
        response = await self.get_response(request)
        self._log(request, response, started)
        return response

    def _log(self, request, response, started):
        if not self._is_api_endpoint(request.path):
            return
        duration_ms = (time.monotonic() - started) * 1000
        logger.info(
            f"{request.method} {request.path} -> {response.status_code} ({duration_ms:.1f} ms)"
        )

    def _is_api_endpoint(self, path):
        """
        Check if the path is a Report Export API endpoint.

        Args:
            path: Request path

        Returns:
            True if this is an API endpoint, False otherwise
        """
        return path.startswith('/api/report/')
