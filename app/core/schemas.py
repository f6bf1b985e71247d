from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

from app.core.casing import to_snake_keys


class ApiModel(BaseModel):
    """Base for request/response bodies: accepts either casing, serializes camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _normalize_keys(cls, data):
        if isinstance(data, dict):
            return to_snake_keys(data)
        return data


def not_null(value):
    """Update bodies may omit a NOT NULL column but never set it to null."""
    if value is None:
        raise ValueError("Field cannot be null")
    return value
