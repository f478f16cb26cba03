"""Realms: the institution-level tenant a course belongs to."""

from typing import Optional

from pydantic import Field

from .base import EdModel, Empty
from .ids import RealmID


class RealmTheme(EdModel):
    logo: str
    accent_color: str


class RealmAdminCapability(EdModel):
    discussion: bool
    chat: bool
    workspaces: bool
    lessons: bool


class RealmSettings(EdModel):
    course_inactive_on_lti_creation: bool
    allow_course_creation: bool
    lti_and_course_creation: bool
    discuss_shared_category: str
    theme: RealmTheme
    sourced_id_as_unique_identifier: bool
    allow_chat: bool
    force_name_update: bool
    realm_admin_capability: RealmAdminCapability
    allow_lessons_and_workspaces_enable: bool


class Realm(EdModel):
    id: RealmID
    name: str
    type_: str = Field(alias="type")
    domain: str
    associated_domains: str
    features: Empty
    settings: RealmSettings
    affiliate_realm_id: Optional[RealmID] = None
