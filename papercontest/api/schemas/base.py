"""Base classes shared by request schemas."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RequestSchema(BaseModel):
    """Base for request bodies: camelCase on the wire, unknown keys rejected.

    String values are kept exactly as sent.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )
