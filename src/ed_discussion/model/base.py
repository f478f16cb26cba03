"""
Base class shared by every Ed resource model.

Resources are read-only: they come out of a response decode and are never
sent back. Keys the service adds that we don't model are ignored; values of
the wrong JSON type are rejected rather than coerced.
"""

from typing import Any, Dict

from pydantic import (
    BaseModel,
    ConfigDict,
    SerializationInfo,
    SerializerFunctionWrapHandler,
    model_serializer,
)

from .codecs import TriState


class EdModel(BaseModel):
    model_config = ConfigDict(
        extra="ignore",
        strict=True,
        frozen=True,
        populate_by_name=True,
    )

    @model_serializer(mode="wrap")
    def _omit_absent_flags(
        self, handler: SerializerFunctionWrapHandler, info: SerializationInfo
    ) -> Dict[str, Any]:
        # tri-state flags in their absent state are dropped from the output
        data = handler(self)
        for name, field in type(self).model_fields.items():
            if not any(isinstance(meta, TriState) for meta in field.metadata):
                continue
            key = field.alias if (info.by_alias and field.alias) else name
            if key in data and data[key] is None:
                del data[key]
        return data

    def to_wire(self) -> Dict[str, Any]:
        """Re-encode this resource into the JSON shape the service sends"""
        return self.model_dump(mode="json", by_alias=True)


class Empty(EdModel):
    """Stand-in for objects not known to contain any fields"""
