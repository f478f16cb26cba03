"""
Codecs for the non-obvious wire encodings used by the Ed API.

- SentinelOptional: a concrete value (usually 0) on the wire means "not set"
- TriState: absent / false / true map to three distinct states
- OpenEnum: known string variants plus an Other(value) catch-all

Each codec has plain decode()/encode() methods and doubles as a pydantic
Annotated marker, so entity models never compare against sentinels inline.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Generic, Optional, Type, TypeVar, Union

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

E = TypeVar("E", bound=Enum)
S = TypeVar("S")


class SentinelOptional:
    """
    Optional integer whose absence is encoded as a sentinel value.

    decode(sentinel) -> None, decode(n) -> n
    encode(None) -> sentinel, encode(n) -> n

    With nullable=True the wire may also carry JSON null, which decodes to
    None as well (and re-encodes as the sentinel).
    """

    def __init__(self, sentinel: int = 0, nullable: bool = False):
        self.sentinel = sentinel
        self.nullable = nullable

    def decode(self, wire: Optional[int]) -> Optional[int]:
        if wire is None or wire == self.sentinel:
            return None
        return wire

    def encode(self, value: Optional[int]) -> int:
        if value is None:
            return self.sentinel
        if value == self.sentinel:
            raise ValueError(
                f"{value} is the absence sentinel and cannot be encoded as a set value"
            )
        return value

    def __repr__(self) -> str:
        return f"SentinelOptional(sentinel={self.sentinel!r}, nullable={self.nullable!r})"

    def __get_pydantic_core_schema__(
        self, source: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        wire = core_schema.int_schema(ge=0, strict=True)
        if self.nullable:
            wire = core_schema.nullable_schema(wire)
        return core_schema.no_info_after_validator_function(
            self.decode,
            wire,
            serialization=core_schema.plain_serializer_function_ser_schema(self.encode),
        )


class TriState(Generic[S]):
    """
    Three semantic states carried by a boolean that may also be missing.

    Missing (or null) and false are different states and are never merged.
    encode() returns None for the absent state; EdModel.to_wire() drops such
    keys so the re-encoded object has the key missing again.
    """

    def __init__(self, absent: S, false: S, true: S):
        self.absent = absent
        self.false = false
        self.true = true

    def decode(self, wire: Optional[bool]) -> S:
        if wire is None:
            return self.absent
        return self.true if wire else self.false

    def encode(self, value: S) -> Optional[bool]:
        if value == self.absent:
            return None
        if value == self.false:
            return False
        if value == self.true:
            return True
        raise ValueError(f"{value!r} is not one of the three states")

    def __get_pydantic_core_schema__(
        self, source: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_after_validator_function(
            self.decode,
            core_schema.nullable_schema(core_schema.bool_schema(strict=True)),
            serialization=core_schema.plain_serializer_function_ser_schema(self.encode),
        )


@dataclass(frozen=True)
class Other:
    """A wire value not registered in an enumeration, kept verbatim"""

    value: str

    def __str__(self) -> str:
        return self.value


class OpenEnum(Generic[E]):
    """
    Decode wire strings into members of `enum_cls`, falling back to Other.

    Matching is exact and case-sensitive against the members' values. A new
    variant added by the service never makes decoding fail.
    """

    def __init__(self, enum_cls: Type[E]):
        self.enum_cls = enum_cls

    def decode(self, wire: Any) -> Union[E, Other]:
        if isinstance(wire, (self.enum_cls, Other)):
            return wire
        if not isinstance(wire, str):
            raise ValueError(
                f"expected a string for {self.enum_cls.__name__}, got {type(wire).__name__}"
            )
        try:
            return self.enum_cls(wire)
        except ValueError:
            return Other(wire)

    def encode(self, value: Union[E, Other]) -> str:
        return wire_value(value)

    def __get_pydantic_core_schema__(
        self, source: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            self.decode,
            serialization=core_schema.plain_serializer_function_ser_schema(self.encode),
        )


def wire_value(value: Union[Enum, Other]) -> str:
    """Registered wire token of a member, or the raw string of an Other"""
    # both carry the wire string in .value
    return value.value


def is_known(value: Union[Enum, Other]) -> bool:
    return not isinstance(value, Other)


# anonymous poster proxy ID: 0 when the post is not anonymous
AnonymousID = Annotated[Optional[int], SentinelOptional(0)]

# digest frequency in minutes: 0 ("none" in the UI) or null when unset
DigestInterval = Annotated[Optional[int], SentinelOptional(0, nullable=True)]
