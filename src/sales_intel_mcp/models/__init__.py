from __future__ import annotations

from typing import Any, TypeVar, Union

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from sales_intel_mcp.core.errors import UnknownError
from sales_intel_mcp.core.result import Err

M = TypeVar("M", bound=BaseModel)


class VendorModel(BaseModel):
    """Vendor payload: camelCase on the wire, snake_case in Python, unknown fields kept."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # an explicit null falls back to the field default
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data

    def dump(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


def parse_payload(model: type[M], data: Any) -> Union[M, Err]:
    """
    Validate a decoded vendor body; an absent body parses as an empty model.

    A body that does not fit ``model`` comes back as ``Err(UnknownError)``.
    """
    try:
        return model.model_validate(data if data is not None else {})
    except PydanticValidationError as e:
        return Err(UnknownError(f"Unexpected response shape ({e.error_count()} invalid fields)."))
