"""Threads, the replies attached to them, and course thread listings."""

from typing import Any, List, Optional

from pydantic import Field, NonNegativeInt, model_validator

from .base import EdModel
from .codecs import AnonymousID
from .enums import (
    ReplyTypeValue,
    SortKeyValue,
    ThreadTypeValue,
    ThreadWatchStatus,
    WatchStatusValue,
)
from .ids import CourseID, ReplyID, ThreadID, UserID
from .user import ThreadParticipant


class Reply(EdModel):
    """A comment or answer on a thread; comments nest to any depth"""

    id: ReplyID
    user_id: UserID
    course_id: CourseID
    thread_id: ThreadID
    original_id: Optional[ThreadID] = None
    parent_id: Optional[ReplyID] = None
    editor_id: Optional[UserID] = None
    number: NonNegativeInt
    type_: ReplyTypeValue = Field(alias="type")
    # "normal" in every payload seen so far
    kind: str
    content: str
    document: str
    flag_count: NonNegativeInt
    vote_count: NonNegativeInt
    is_endorsed: bool
    is_anonymous: bool
    is_private: bool
    is_resolved: bool
    created_at: str
    updated_at: str
    deleted_at: Optional[str] = None
    anonymous_id: AnonymousID
    vote: NonNegativeInt
    comments: List["Reply"]


class _ThreadFields(EdModel):
    id: ThreadID
    user_id: UserID
    course_id: CourseID
    original_id: Optional[ThreadID] = None
    editor_id: Optional[UserID] = None
    # ID of the accepted answer, if any
    accepted_id: Optional[ReplyID] = None
    # set when this thread was marked a duplicate of another
    duplicate_id: Optional[ThreadID] = None
    # user-facing number of the thread within its course
    number: NonNegativeInt
    type_: ThreadTypeValue = Field(alias="type")
    title: str
    content: str
    document: str
    # category names, possibly empty strings
    category: str
    subcategory: str
    subsubcategory: str
    flag_count: NonNegativeInt
    star_count: NonNegativeInt
    view_count: NonNegativeInt
    unique_view_count: NonNegativeInt
    vote_count: NonNegativeInt
    reply_count: NonNegativeInt
    unresolved_count: NonNegativeInt
    is_locked: bool
    is_pinned: bool
    is_private: bool
    is_endorsed: bool
    is_student_answered: bool
    is_staff_answered: bool
    is_archived: bool
    is_anonymous: bool
    is_megathread: bool
    anonymous_comments: bool
    approved_status: str
    created_at: str
    updated_at: str
    deleted_at: Optional[str] = None
    pinned_at: Optional[str] = None
    # proxy ID standing in for an anonymous poster
    anonymous_id: AnonymousID
    vote: NonNegativeInt
    # the remaining fields are relative to the requesting user
    is_seen: bool
    is_starred: bool
    is_watched: WatchStatusValue = ThreadWatchStatus.NOT_WATCHING
    # replies posted since the requesting user last viewed the thread
    new_reply_count: NonNegativeInt
    duplicate_title: Optional[str] = None


class PartialThread(_ThreadFields):
    """A thread as it appears in a course listing"""

    is_answered: bool
    # last time the requesting user saw the thread in the feed, if ever
    glanced_at: Optional[str] = None
    user: Optional[ThreadParticipant] = None


class Thread(_ThreadFields):
    """A thread with its answers and comments"""

    glanced_at: str
    answers: List[Reply]
    comments: List[Reply]


class ThreadResponse(EdModel):
    """
    Body of the single-thread endpoints.

    Current service versions wrap the thread as {"thread": {...}, "users": [...]};
    older ones return the thread object itself. Both are accepted.
    """

    thread: Thread
    users: List[ThreadParticipant] = []

    @model_validator(mode="before")
    @classmethod
    def _accept_bare_thread(cls, data: Any) -> Any:
        if isinstance(data, dict) and not isinstance(data.get("thread"), dict):
            return {"thread": data}
        return data


class CourseThreads(EdModel):
    """Response of GET /api/courses/:id/threads"""

    sort_key: SortKeyValue
    threads: List[PartialThread]
    users: List[ThreadParticipant]

    @classmethod
    def get(cls, client, course_id: CourseID, options=None):
        """Same as client.get_course_threads(course_id, options)"""
        return client.get_course_threads(course_id, options)
