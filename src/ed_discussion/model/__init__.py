"""Typed, read-only models of the resources returned by the Ed API."""

from .base import EdModel, Empty
from .codecs import (
    AnonymousID,
    DigestInterval,
    OpenEnum,
    Other,
    SentinelOptional,
    TriState,
    is_known,
    wire_value,
)
from .course import (
    Category,
    Course,
    CourseChatSettings,
    CourseCodeEditorSettings,
    CourseDiscussionSettings,
    CourseFeatures,
    CourseLessonSettings,
    CourseRole,
    CourseRoleLabels,
    CourseRoleSettings,
    CourseSettings,
    CourseTheme,
    CourseWorkspaceSettings,
    CourseWorkspaceSettingsInner,
    SelfUserCourse,
)
from .enums import (
    WATCH_FLAG,
    FilterKey,
    ReplyType,
    Role,
    SortKey,
    Theme,
    ThreadListStyle,
    ThreadType,
    ThreadWatchStatus,
)
from .ids import CourseID, Identifier, LabID, RealmID, ReplyID, ThreadID, UserID
from .lab import Lab
from .realm import Realm, RealmAdminCapability, RealmSettings, RealmTheme
from .thread import CourseThreads, PartialThread, Reply, Thread, ThreadResponse
from .user import (
    DesktopNotificationScopes,
    SelfUser,
    ThreadParticipant,
    User,
    UserSettings,
)
