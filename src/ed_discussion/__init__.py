"""
ed_discussion: a typed client for the Ed Discussion API.
"""
import logging

__version__ = "0.3.0"

from .clients import (  # noqa: E402
    AiohttpTransport,
    ClientConfig,
    ConfigError,
    DecodeError,
    EdClient,
    EdError,
    HttpStatusError,
    RawResponse,
    RequestsTransport,
    SyncEdClient,
    TransportError,
)
from .model import (  # noqa: E402
    CourseID,
    FilterKey,
    LabID,
    Other,
    RealmID,
    ReplyID,
    Role,
    SortKey,
    ThreadID,
    ThreadWatchStatus,
    UserID,
)
from .options import GetCourseThreadsOptions  # noqa: E402

logging.getLogger(__name__).addHandler(logging.NullHandler())
