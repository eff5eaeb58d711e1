"""Shared pydantic base for stored and API documents."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """camelCase on the wire and in storage, snake_case in Python.

    Unknown fields are ignored so documents written by newer app versions still load.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_json_dict(self) -> dict:
        """JSON-ready dict with absent optional fields omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
