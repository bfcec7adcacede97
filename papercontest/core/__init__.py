"""Core infrastructure package for shared application functionality.

This package provides the foundational components used across all layers
of the platform:

- **config**: Application settings and the client build environment
- **context**: Request context and correlation ID management
- **exceptions**: Structured exception hierarchy with error codes
- **error_context**: Sensitive data sanitization for safe logging
- **logging**: Structured logging with cloud provider integrations
- **observability**: Distributed tracing with OpenTelemetry
- **validators**: Reusable field rules shared by request schemas
"""
