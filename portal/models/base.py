from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""

    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    def to_api(self, **kwargs: Any) -> dict:
        return self.model_dump(mode="json", by_alias=True, **kwargs)


def coerce_enum(enum_cls: type[Enum], value: Any, default: Enum) -> Any:
    """Map an unknown backend string onto ``default`` instead of failing validation."""
    if value is None or isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        return default
