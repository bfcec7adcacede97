"""HTTP API layer built on FastAPI.

- **main**: application factory and lifecycle
- **auth**: public-route marker and current-user accessors
- **middleware**: security headers, correlation IDs, request logging, errors
- **routers**: feature endpoints mounted under the API prefix
- **schemas**: Pydantic request/response models
- **utils**: orjson response class
"""
