"""
Enumerations used by Ed resources.

Every enumeration is open: values the service adds later decode to
codecs.Other instead of failing. The `*Value` aliases are what entity fields
are annotated with.
"""

from enum import Enum
from typing import Annotated, Union

from .codecs import OpenEnum, Other, TriState


class Role(str, Enum):
    """The role of a user in a course"""

    STUDENT = "student"
    MENTOR = "mentor"
    TUTOR = "tutor"
    STAFF = "staff"
    ADMIN = "admin"


class ThreadType(str, Enum):
    QUESTION = "question"
    ANNOUNCEMENT = "announcement"
    POST = "post"


class ReplyType(str, Enum):
    COMMENT = "comment"
    ANSWER = "answer"


class ThreadListStyle(str, Enum):
    """The thread list style in the appearance settings"""

    FULL = "full"
    COMPACT = "compact"
    ULTRA_COMPACT = "ultra-compact"


class Theme(str, Enum):
    """UI theme in the appearance settings"""

    OS = "os"
    LIGHT = "light"
    DARK = "dark"


class SortKey(str, Enum):
    """How threads of a course are sorted"""

    NEW = "new"
    TOP = "top"
    ACTIVE = "active"


class FilterKey(str, Enum):
    """Feed filters offered by the web UI"""

    UNRESOLVED = "unresolved"
    UNANSWERED = "unanswered"
    UNREAD = "unread"
    STARRED = "starred"
    WATCHING = "watching"
    MINE = "mine"


class ThreadWatchStatus(Enum):
    """The ways in which a user may watch a thread"""

    # "Never be notified"
    IGNORING = "ignoring"
    # "Be notified of direct replies only"
    NOT_WATCHING = "not_watching"
    # "Be notified of all activity in this thread"
    WATCHING = "watching"


WATCH_FLAG = TriState(
    absent=ThreadWatchStatus.NOT_WATCHING,
    false=ThreadWatchStatus.IGNORING,
    true=ThreadWatchStatus.WATCHING,
)

RoleValue = Annotated[Union[Role, Other], OpenEnum(Role)]
ThreadTypeValue = Annotated[Union[ThreadType, Other], OpenEnum(ThreadType)]
ReplyTypeValue = Annotated[Union[ReplyType, Other], OpenEnum(ReplyType)]
ThreadListStyleValue = Annotated[Union[ThreadListStyle, Other], OpenEnum(ThreadListStyle)]
ThemeValue = Annotated[Union[Theme, Other], OpenEnum(Theme)]
SortKeyValue = Annotated[Union[SortKey, Other], OpenEnum(SortKey)]
FilterKeyValue = Annotated[Union[FilterKey, Other], OpenEnum(FilterKey)]
WatchStatusValue = Annotated[ThreadWatchStatus, WATCH_FLAG]
