"""Users: the requesting user's own profile and thread participants."""

from typing import List, Optional

from .base import EdModel, Empty
from .codecs import DigestInterval
from .course import SelfUserCourse
from .enums import RoleValue, ThemeValue, ThreadListStyleValue
from .ids import RealmID, UserID
from .realm import Realm


class DesktopNotificationScopes(EdModel):
    announcement: bool
    # no way to change this in the UI
    thread: bool
    direct_reply: bool
    mention: bool
    # no way to change this in the UI
    chat: bool
    watch: bool


class UserSettings(EdModel):
    # Frequency of new-thread emails in minutes. 1 is "instant" in the UI,
    # 0 is "none" and decodes to None.
    digest_interval: DigestInterval
    discuss_feed_style: ThreadListStyleValue
    accessible: bool
    # "Language" setting, e.g. "en_us"; empty if never set
    locale: str
    theme: ThemeValue
    character_key_shortcuts_disabled: bool
    set_tz_automatically: bool
    # tz database identifier
    tz: str
    reply_via_email: bool
    email_announcements: bool
    email_watched_threads: bool
    email_thread_replies: bool
    email_comment_replies: bool
    email_mentions: bool
    mention_direct_message_digest_interval: str
    channel_digest_interval: str
    allow_password_login: bool
    desktop_notifications_enabled: bool
    desktop_notifications_scopes: DesktopNotificationScopes
    # ISO 8601; the earliest valid datetime when no snooze is active
    snooze_end: str
    deactivated: bool


class User(EdModel):
    id: UserID
    # site-wide role label, e.g. "user"; see course_role for the course role
    role: str
    name: str
    email: str
    username: Optional[str] = None
    avatar: Optional[str] = None
    features: Empty
    settings: UserSettings
    activated: bool
    created_at: str
    course_role: Optional[RoleValue] = None
    secondary_emails: List[str]
    has_password: bool
    is_lti: bool
    is_sso: bool
    can_change_name: bool
    has_pats: bool
    realm_id: Optional[RealmID] = None


class SelfUser(EdModel):
    """Response of GET /api/user"""

    courses: List[SelfUserCourse]
    push_key: str
    realms: List[Realm]
    # ISO 8601 server time
    time: str
    user: User


class ThreadParticipant(EdModel):
    """A user as embedded next to a list of threads"""

    id: UserID
    role: str
    name: str
    avatar: Optional[str] = None
    course_role: Optional[RoleValue] = None
