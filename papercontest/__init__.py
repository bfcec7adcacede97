"""papercontest - shared request layer of the paper-competition platform.

The platform runs teacher research-paper competitions: organisers publish
competitions, teachers register, pay, submit papers, and reviewers reject
or award the submissions. This package holds the pieces every feature
module shares.

Architecture Overview:
- **API Layer**: FastAPI application shell, middleware, route decorators
  and request/response schemas
- **Core Layer**: Configuration, logging, tracing, errors and request context
- **Domain Layer**: Closed status vocabularies for competitions, payments,
  users and registrations

Persistence and authentication enforcement live outside this package; the
code here only declares the shapes and metadata those layers consume.
"""
