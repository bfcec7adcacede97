"""FastAPI middleware for cross-cutting request/response concerns.

- **SecurityHeadersMiddleware**: hardening headers on every response
- **RequestContextMiddleware**: correlation ID propagation
- **RequestLoggingMiddleware**: structured request logging with durations
- **error_handler**: exception handlers rendering ``ErrorResponse`` bodies

Middleware run in reverse order of registration; see ``create_app``.
"""
