"""Request context middleware for correlation ID propagation.

The correlation ID is taken from the ``X-Correlation-ID`` request header, or
generated when the caller sent none. It is stored in the request context,
bound to every log line emitted while the request is handled, and echoed
back in the response header.
"""

from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from papercontest.api.constants import CORRELATION_ID_HEADER
from papercontest.core.context import RequestContext, generate_correlation_id


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Establish the correlation ID for each request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Process the request with context management.

        Args:
            request: The incoming request.
            call_next: The next middleware/endpoint.

        Returns:
            Response: Response with correlation ID header.
        """
        correlation_id = (
            request.headers.get(CORRELATION_ID_HEADER) or generate_correlation_id()
        )
        # Left set after the response so the outermost error handler can
        # still report it; each ASGI request runs in its own context copy.
        RequestContext.set_correlation_id(correlation_id)
        request.state.correlation_id = correlation_id

        with logger.contextualize(correlation_id=correlation_id):
            response = await call_next(request)
            response.headers[CORRELATION_ID_HEADER] = correlation_id
            return response
