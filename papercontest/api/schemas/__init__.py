"""Pydantic schema models for API request/response validation.

- **base**: shared request configuration (camelCase aliases, strict keys)
- **pagination**: page selection and the paginated response wrapper
- **registrations**: registration, rejection and invoice request bodies
- **accounts**: account registration and password change request bodies
- **envelope**: success envelope for feature endpoints
- **errors**: standardized error response format
"""
