"""Courses, their settings, and a user's role within a course."""

from typing import List, Optional

from .base import EdModel
from .codecs import DigestInterval
from .enums import RoleValue
from .ids import CourseID, LabID, RealmID, UserID
from .lab import Lab


class CourseRoleSettings(EdModel):
    """Overrides of global settings for a single course"""

    digest_interval: DigestInterval
    email_announcements: Optional[bool] = None


class CourseRole(EdModel):
    """The role of a user in a course"""

    user_id: UserID
    course_id: CourseID
    lab_id: Optional[LabID] = None
    role: RoleValue
    digest: bool
    settings: CourseRoleSettings
    created_at: str
    deleted_at: Optional[str] = None


class CourseFeatures(EdModel):
    analytics: bool
    discussion: bool


class Category(EdModel):
    name: str
    subcategories: List["Category"]
    thread_template: Optional[str] = None


class CourseDiscussionSettings(EdModel):
    # can private threads be created?
    private: bool
    private_threads_only: bool
    anonymous_comments: bool
    anonymous_comments_override: bool
    anonymous: bool
    # can staff see the true identity of anonymous posters?
    anonymous_to_staff: bool
    threads_require_approval: bool
    unread_indicator_hidden: bool
    deleted: bool
    categories: List[Category]
    thread_templates_enabled: bool
    category_unselected: bool
    snippet_languages: List[str]
    # default language of code snippets in posts
    default_snippet_language: str
    rejection_comment_template: Optional[str] = None
    bot_enabled: bool
    bot_enabled_v2: bool
    bot_name: str
    bot_avatar: str
    full_announcement_emails: bool
    no_digests: bool
    digest_interval: DigestInterval
    saved_replies_enabled: bool
    saved_replies: List[str]
    sortable_feed: bool
    default_feed_sort: str
    thread_numbers: bool
    comment_numbers: bool
    tutorial_badge_visible_to_all: bool
    tutorial_badge_visible_anon: bool
    # staff can mark a course read only, e.g. once the term is over
    readonly: bool
    # if false, only the two most recently pinned threads are shown
    show_all_pinned_threads: bool
    comment_endorsements: bool


class CourseChatSettings(EdModel):
    student_dm_student: bool
    student_dm_staff: bool
    channels_enabled: bool


class CourseLessonSettings(EdModel):
    quiz_question_auto_submit: bool
    karel_slide_enabled: bool
    workspace_partition_slide_enabled: bool
    autoplay_videos: bool
    hide_video_download: bool


class CourseWorkspaceSettingsInner(EdModel):
    rstudio_layout: str


class CourseWorkspaceSettings(EdModel):
    default_type: str
    student_creation_disabled: bool
    remote_desktop: bool
    remote_app: bool
    saturn_override: bool
    saturn_default_kernel: str
    disable_student_workspace_upload: bool
    extra_paths: bool
    settings: CourseWorkspaceSettingsInner


class CourseCodeEditorSettings(EdModel):
    """Editor defaults; every key the service sends here may be null, none are modelled"""


class CourseTheme(EdModel):
    logo: str
    background: str
    foreground: str


class CourseRoleLabels(EdModel):
    """Display names a course uses for each role"""

    student: str
    mentor: str
    tutor: str
    staff: str
    admin: str


class CourseSettings(EdModel):
    default_page: str
    user_lab_enrollment: bool
    lab_user_agent_regex: str
    lockdown_user_agent_regex: str
    access_codes_enabled: bool
    access_codes_public: bool
    setup_status: str
    discussion: CourseDiscussionSettings
    chat: CourseChatSettings
    lesson: CourseLessonSettings
    workspace: CourseWorkspaceSettings
    challenge_workspace: CourseWorkspaceSettings
    code_editor: CourseCodeEditorSettings
    theme: CourseTheme
    role_labels: CourseRoleLabels


class Course(EdModel):
    id: CourseID
    realm_id: RealmID
    code: str
    name: str
    year: str
    session: str
    status: str
    features: CourseFeatures
    settings: CourseSettings
    created_at: str
    is_lab_regex_active: bool


class SelfUserCourse(EdModel):
    """A course as listed for the requesting user"""

    course: Course
    role: CourseRole
    lab: Optional[Lab] = None
    # last time this course had any activity
    last_active: str
