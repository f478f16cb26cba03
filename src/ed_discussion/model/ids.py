"""
Identifier types for Ed resources.

Every resource kind gets its own wrapper so a course ID can never be passed
where a thread ID is expected. Two identifiers are equal only when both the
kind and the number match; `int(ident)` is the only way back to a number.
"""

from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

_MAX_ID = 2**64 - 1


class Identifier:
    """Base class for the per-resource identifier wrappers"""

    __slots__ = ("_value",)

    def __init__(self, value: int):
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(
                f"{type(self).__name__} wraps an int, got {type(value).__name__}"
            )
        if not 0 <= value <= _MAX_ID:
            raise ValueError(f"{type(self).__name__} out of range: {value}")
        object.__setattr__(self, "_value", value)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        # copy and pickle rebuild through __init__, never through setattr
        return (type(self), (self._value,))

    def __int__(self) -> int:
        return self._value

    def __eq__(self, other) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._value))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value})"

    def __str__(self) -> str:
        return str(self._value)

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        from_int = core_schema.no_info_after_validator_function(
            cls, core_schema.int_schema(ge=0, le=_MAX_ID, strict=True)
        )
        return core_schema.json_or_python_schema(
            json_schema=from_int,
            python_schema=core_schema.union_schema(
                [core_schema.is_instance_schema(cls), from_int]
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(int),
        )


class UserID(Identifier):
    __slots__ = ()


class CourseID(Identifier):
    __slots__ = ()

    def get_threads(self, client, options=None):
        """First page of this course's threads; a coroutine when `client` is an EdClient"""
        return client.get_course_threads(self, options)

    def get_thread_by_number(self, client, number: int):
        return client.get_thread_by_number(self, number)


class LabID(Identifier):
    __slots__ = ()


# machine-width on the service side; bounded like the others here
class RealmID(Identifier):
    __slots__ = ()


class ThreadID(Identifier):
    __slots__ = ()


class ReplyID(Identifier):
    __slots__ = ()
