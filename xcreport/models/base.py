"""Base model configuration for all data structures."""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class Model(BaseModel):
    """Base model with standard configuration."""

    model_config = ConfigDict(frozen=True)


def unwrap(value: Any) -> Any:
    """Strip the typed wrappers used by the result bundle JSON format.

    Scalars arrive as ``{"_type": {...}, "_value": "..."}``, arrays as
    ``{"_type": {...}, "_values": [...]}`` and objects carry their type name in
    ``{"_type": {"_name": "..."}}``. Objects keep the type name as a plain
    ``_type`` string so polymorphic nodes can be told apart.
    """
    if isinstance(value, Mapping):
        if "_values" in value:
            return [unwrap(item) for item in value["_values"]]
        if "_value" in value:
            return value["_value"]
        unwrapped = {key: unwrap(item) for key, item in value.items()}
        type_info = value.get("_type")
        if isinstance(type_info, Mapping):
            unwrapped["_type"] = type_info.get("_name")
        return unwrapped
    if isinstance(value, list):
        return [unwrap(item) for item in value]
    return value


class XCResultModel(BaseModel):
    """Base model for objects read from a result bundle."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    type_name: str | None = Field(default=None, alias="_type")

    @model_validator(mode="before")
    @classmethod
    def _unwrap_values(cls, data: Any) -> Any:
        return unwrap(data)
