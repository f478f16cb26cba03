"""
Clients for the Ed Discussion API.

EdClient is async (aiohttp) and safe to share between concurrent tasks;
SyncEdClient exposes the same operations over a blocking requests.Session.
Both send a bearer token and a User-Agent with every request and decode the
body into the resource model asked for. Any failure is raised as an EdError
subclass; nothing is retried.

    async with EdClient.from_env() as client:
        me = await client.get_self_user()
        listing = await client.get_course_threads(CourseID(1234))
"""
import json
import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import ValidationError

from ..model.base import EdModel
from ..model.ids import CourseID, Identifier, ThreadID
from ..model.thread import CourseThreads, Thread, ThreadResponse
from ..model.user import SelfUser
from ..options import GetCourseThreadsOptions
from .environconfig import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    ClientConfig,
)
from .errors import ConfigError, DecodeError, HttpStatusError
from .transport import (
    AiohttpTransport,
    AsyncTransport,
    Params,
    RawResponse,
    RequestsTransport,
    SyncTransport,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=EdModel)


def _require_id(value: Any, kind: Type[Identifier]) -> int:
    """Number inside `value`, refusing identifiers of any other resource kind"""
    if not isinstance(value, kind):
        raise TypeError(f"expected {kind.__name__}, got {type(value).__name__}")
    return int(value)


def _require_number(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"thread number must be an int, got {type(value).__name__}")
    return value


def self_user_path() -> str:
    return "/api/user"


def course_threads_path(course_id: CourseID) -> str:
    return f"/api/courses/{_require_id(course_id, CourseID)}/threads"


def thread_path(thread_id: ThreadID) -> str:
    return f"/api/threads/{_require_id(thread_id, ThreadID)}"


def thread_by_number_path(course_id: CourseID, number: int) -> str:
    return f"/api/courses/{_require_id(course_id, CourseID)}/threads/{_require_number(number)}"


def _error_message(body: bytes) -> Optional[str]:
    """The "message" of a JSON error body, if the service sent one"""
    try:
        data = json.loads(body)
    except ValueError:
        return None
    if isinstance(data, dict) and isinstance(data.get("message"), str):
        return data["message"]
    return None


def _describe(exc: ValidationError) -> List[Dict[str, Any]]:
    return [
        {
            "path": ".".join(str(part) for part in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors(include_url=False)
    ]


class _ClientBase:
    """Request building and response decoding shared by both clients"""

    def __init__(
        self,
        token: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        if not token:
            raise ConfigError("an API token is required")
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_url={self.base_url!r})"

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "User-Agent": self.user_agent,
            "Accept": "application/json",
        }

    def _decode(self, response: RawResponse, model: Type[M]) -> M:
        logger.debug("%s -> %d (%d bytes)", response.url, response.status, len(response.body))
        if not response.ok:
            raise HttpStatusError(
                response.status,
                response.url,
                response.body,
                _error_message(response.body),
            )
        try:
            return model.model_validate_json(response.body)
        except ValidationError as exc:
            raise DecodeError(model.__name__, _describe(exc), response.url) from exc


class EdClient(_ClientBase):
    """
    Async Ed Discussion client.

    The client keeps no per-call state, so one instance can serve many
    concurrent tasks. The default transport opens its aiohttp session on the
    first request; close it with `await client.close()` or `async with`.
    """

    def __init__(
        self,
        token: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[AsyncTransport] = None,
    ):
        super().__init__(token, base_url=base_url, user_agent=user_agent)
        self.transport = transport or AiohttpTransport(timeout=timeout)

    @classmethod
    def from_config(cls, config: ClientConfig, transport: Optional[AsyncTransport] = None) -> "EdClient":
        return cls(
            config.token,
            base_url=config.base_url,
            user_agent=config.user_agent,
            timeout=config.timeout,
            transport=transport,
        )

    @classmethod
    def from_env(cls, env_file=None, transport: Optional[AsyncTransport] = None) -> "EdClient":
        return cls.from_config(ClientConfig.from_env(env_file), transport)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        await self.transport.close()

    async def fetch(
        self,
        path: str,
        model: Type[M],
        params: Optional[Params] = None,
        method: str = "GET",
    ) -> M:
        """Request `path` below the base URL and decode the body as `model`"""
        url = self._url(path)
        logger.debug("%s %s params=%s", method, url, params)
        response = await self.transport.request(
            method, url, headers=self._headers(), params=params
        )
        return self._decode(response, model)

    async def get_self_user(self) -> SelfUser:
        """GET /api/user: the requesting user, their courses and realms"""
        return await self.fetch(self_user_path(), SelfUser)

    async def get_course_threads(
        self,
        course_id: CourseID,
        options: Optional[GetCourseThreadsOptions] = None,
    ) -> CourseThreads:
        """GET /api/courses/:id/threads, one page of the course feed"""
        options = options or GetCourseThreadsOptions()
        return await self.fetch(course_threads_path(course_id), CourseThreads, options.as_params())

    async def get_thread(self, thread_id: ThreadID) -> Thread:
        """GET /api/threads/:id"""
        response = await self.fetch(thread_path(thread_id), ThreadResponse)
        return response.thread

    async def get_thread_by_number(self, course_id: CourseID, number: int) -> Thread:
        """GET /api/courses/:id/threads/:number, by the number shown in the course"""
        response = await self.fetch(thread_by_number_path(course_id, number), ThreadResponse)
        return response.thread


class SyncEdClient(_ClientBase):
    """Blocking Ed Discussion client with the same operations as EdClient"""

    def __init__(
        self,
        token: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[SyncTransport] = None,
    ):
        super().__init__(token, base_url=base_url, user_agent=user_agent)
        self.transport = transport or RequestsTransport(timeout=timeout)

    @classmethod
    def from_config(cls, config: ClientConfig, transport: Optional[SyncTransport] = None) -> "SyncEdClient":
        return cls(
            config.token,
            base_url=config.base_url,
            user_agent=config.user_agent,
            timeout=config.timeout,
            transport=transport,
        )

    @classmethod
    def from_env(cls, env_file=None, transport: Optional[SyncTransport] = None) -> "SyncEdClient":
        return cls.from_config(ClientConfig.from_env(env_file), transport)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        self.transport.close()

    def fetch(
        self,
        path: str,
        model: Type[M],
        params: Optional[Params] = None,
        method: str = "GET",
    ) -> M:
        url = self._url(path)
        logger.debug("%s %s params=%s", method, url, params)
        response = self.transport.request(method, url, headers=self._headers(), params=params)
        return self._decode(response, model)

    def get_self_user(self) -> SelfUser:
        return self.fetch(self_user_path(), SelfUser)

    def get_course_threads(
        self,
        course_id: CourseID,
        options: Optional[GetCourseThreadsOptions] = None,
    ) -> CourseThreads:
        options = options or GetCourseThreadsOptions()
        return self.fetch(course_threads_path(course_id), CourseThreads, options.as_params())

    def get_thread(self, thread_id: ThreadID) -> Thread:
        return self.fetch(thread_path(thread_id), ThreadResponse).thread

    def get_thread_by_number(self, course_id: CourseID, number: int) -> Thread:
        return self.fetch(thread_by_number_path(course_id, number), ThreadResponse).thread
