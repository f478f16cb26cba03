import asyncio
import json
from unittest.mock import Mock, patch

import pytest
import requests
from aiohttp import test_utils, web

import payloads
from conftest import FakeAsyncTransport, FakeSyncTransport
from ed_discussion import (
    AiohttpTransport,
    DecodeError,
    EdClient,
    GetCourseThreadsOptions,
    HttpStatusError,
    RequestsTransport,
    SyncEdClient,
    TransportError,
)
from ed_discussion.clients.environconfig import DEFAULT_BASE_URL, DEFAULT_USER_AGENT, ClientConfig
from ed_discussion.model import (
    CourseID,
    FilterKey,
    SelfUser,
    Thread,
    ThreadID,
    ThreadWatchStatus,
    UserID,
)


def make_client(transport, **kwargs):
    return EdClient("secret-token", transport=transport, **kwargs)


class TestRequests:
    """What goes out on the wire"""

    async def test_get_self_user(self, async_transport):
        async_transport.body = payloads.dumps(payloads.self_user())
        me = await make_client(async_transport).get_self_user()
        assert isinstance(me, SelfUser)
        assert async_transport.last["method"] == "GET"
        assert async_transport.last["url"] == "https://us.edstem.org/api/user"
        assert async_transport.last["params"] is None

    async def test_headers(self, async_transport):
        async_transport.body = payloads.dumps(payloads.self_user())
        await make_client(async_transport, user_agent="my-bot/1.0").get_self_user()
        headers = async_transport.last["headers"]
        assert headers["Authorization"] == "Bearer secret-token"
        assert headers["User-Agent"] == "my-bot/1.0"

    async def test_default_user_agent(self, async_transport):
        async_transport.body = payloads.dumps(payloads.self_user())
        await make_client(async_transport).get_self_user()
        assert async_transport.last["headers"]["User-Agent"] == DEFAULT_USER_AGENT

    async def test_base_url_override(self, async_transport):
        async_transport.body = payloads.dumps(payloads.self_user())
        await make_client(async_transport, base_url="https://eu.edstem.org/").get_self_user()
        assert async_transport.last["url"] == "https://eu.edstem.org/api/user"

    async def test_course_threads_default_params(self, async_transport):
        async_transport.body = payloads.dumps(payloads.course_threads())
        await make_client(async_transport).get_course_threads(CourseID(1234))
        assert async_transport.last["url"] == "https://us.edstem.org/api/courses/1234/threads"
        assert async_transport.last["params"] == [("limit", "20"), ("offset", "0"), ("sort", "new")]

    async def test_course_threads_with_filter(self, async_transport):
        async_transport.body = payloads.dumps(payloads.course_threads())
        options = GetCourseThreadsOptions(limit=40, offset=40, filter=FilterKey.STARRED)
        await make_client(async_transport).get_course_threads(CourseID(1234), options)
        assert [key for key, _ in async_transport.last["params"]] == ["limit", "offset", "sort", "filter"]
        assert async_transport.last["params"][-1] == ("filter", "starred")

    async def test_thread_paths(self, async_transport):
        async_transport.body = payloads.dumps({"thread": payloads.thread(), "users": []})
        client = make_client(async_transport)
        await client.get_thread(ThreadID(700))
        assert async_transport.last["url"] == "https://us.edstem.org/api/threads/700"
        await client.get_thread_by_number(CourseID(1234), 17)
        assert async_transport.last["url"] == "https://us.edstem.org/api/courses/1234/threads/17"

    @pytest.mark.parametrize("bad_id", [CourseID(700), UserID(700), 700])
    async def test_thread_rejects_other_id_kinds(self, async_transport, bad_id):
        with pytest.raises(TypeError):
            await make_client(async_transport).get_thread(bad_id)
        assert async_transport.calls == []

    async def test_course_threads_rejects_thread_id(self, async_transport):
        with pytest.raises(TypeError):
            await make_client(async_transport).get_course_threads(ThreadID(1234))
        with pytest.raises(TypeError):
            await make_client(async_transport).get_thread_by_number(CourseID(1), "17")
        assert async_transport.calls == []

    def test_token_required(self):
        with pytest.raises(ValueError):
            EdClient("")

    def test_repr_hides_token(self, async_transport):
        assert "secret-token" not in repr(make_client(async_transport))


class TestResponses:
    """How bodies and statuses are turned into resources or failures"""

    async def test_watch_status_end_to_end(self, async_transport):
        threads = [
            payloads.partial_thread(id=1, is_watched=True),
            payloads.partial_thread(id=2),
            payloads.partial_thread(id=3, is_watched=False),
        ]
        async_transport.body = payloads.dumps(payloads.course_threads(*threads))
        listing = await make_client(async_transport).get_course_threads(CourseID(1234))
        assert [t.is_watched for t in listing.threads] == [
            ThreadWatchStatus.WATCHING,
            ThreadWatchStatus.NOT_WATCHING,
            ThreadWatchStatus.IGNORING,
        ]

    @pytest.mark.parametrize("wrapped", [True, False])
    async def test_thread_shapes(self, async_transport, wrapped):
        body = payloads.thread(anonymous_id=7)
        if wrapped:
            body = {"thread": body, "users": [payloads.participant()]}
        async_transport.body = payloads.dumps(body)
        thread = await make_client(async_transport).get_thread(ThreadID(700))
        assert isinstance(thread, Thread)
        assert thread.anonymous_id == 7
        assert thread.answers[0].anonymous_id is None

    @pytest.mark.parametrize("body", [b"", b"not json", b"{\"courses\": [", b"<html>502</html>"])
    async def test_malformed_json_is_decode_error(self, async_transport, body):
        async_transport.body = body
        with pytest.raises(DecodeError) as excinfo:
            await make_client(async_transport).get_self_user()
        assert excinfo.value.model == "SelfUser"
        assert excinfo.value.errors[0]["type"] == "json_invalid"

    async def test_shape_mismatch_names_field(self, async_transport):
        thread = payloads.partial_thread()
        del thread["is_pinned"]
        async_transport.body = payloads.dumps(payloads.course_threads(thread))
        with pytest.raises(DecodeError) as excinfo:
            await make_client(async_transport).get_course_threads(CourseID(1234))
        assert excinfo.value.path == "threads.0.is_pinned"
        assert "threads.0.is_pinned" in str(excinfo.value)
        assert excinfo.value.url == "https://us.edstem.org/api/courses/1234/threads"

    async def test_wrong_json_type_is_decode_error(self, async_transport):
        async_transport.body = payloads.dumps([payloads.self_user()])
        with pytest.raises(DecodeError):
            await make_client(async_transport).get_self_user()

    @pytest.mark.parametrize(
        "field, value",
        [
            ("is_pinned", "yes"),
            ("is_pinned", 1),
            ("flag_count", "3"),
            ("number", 17.0),
            ("vote_count", -5),
            ("title", 42),
        ],
    )
    async def test_values_are_not_coerced(self, async_transport, field, value):
        async_transport.body = payloads.dumps(
            payloads.course_threads(payloads.partial_thread(**{field: value}))
        )
        with pytest.raises(DecodeError) as excinfo:
            await make_client(async_transport).get_course_threads(CourseID(1234))
        assert excinfo.value.path == f"threads.0.{field}"

    async def test_negative_reply_vote_is_rejected(self, async_transport):
        body = {"thread": payloads.thread(answers=[payloads.reply(vote=-1)]), "users": []}
        async_transport.body = payloads.dumps(body)
        with pytest.raises(DecodeError) as excinfo:
            await make_client(async_transport).get_thread(ThreadID(700))
        assert excinfo.value.path == "thread.answers.0.vote"

    async def test_error_status(self, async_transport):
        async_transport.status = 404
        async_transport.body = payloads.dumps({"code": "not_found", "message": "Thread not found"})
        with pytest.raises(HttpStatusError) as excinfo:
            await make_client(async_transport).get_thread(ThreadID(1))
        assert excinfo.value.status == 404
        assert excinfo.value.message == "Thread not found"
        assert "HTTP 404" in str(excinfo.value)

    async def test_error_status_wins_over_valid_body(self, async_transport):
        async_transport.status = 500
        async_transport.body = payloads.dumps(payloads.self_user())
        with pytest.raises(HttpStatusError) as excinfo:
            await make_client(async_transport).get_self_user()
        assert excinfo.value.message is None

    async def test_transport_failure(self):
        transport = FakeAsyncTransport(error=ConnectionResetError("reset by peer"))
        with pytest.raises(TransportError) as excinfo:
            await make_client(transport).get_self_user()
        assert isinstance(excinfo.value.__cause__, ConnectionResetError)

    async def test_concurrent_calls_share_client(self, async_transport):
        async_transport.body = payloads.dumps(payloads.self_user())
        client = make_client(async_transport)
        results = await asyncio.gather(*(client.get_self_user() for _ in range(5)))
        assert len(results) == 5
        assert all(me.user.id == UserID(42) for me in results)
        assert len(async_transport.calls) == 5

    async def test_course_id_shortcuts(self, async_transport):
        async_transport.body = payloads.dumps(payloads.course_threads())
        client = make_client(async_transport)
        listing = await CourseID(1234).get_threads(client)
        assert listing.threads[0].number == 17
        async_transport.body = payloads.dumps(payloads.thread())
        thread = await CourseID(1234).get_thread_by_number(client, 17)
        assert async_transport.last["url"].endswith("/api/courses/1234/threads/17")
        assert thread.number == 17

    async def test_context_manager_closes_transport(self, async_transport):
        async with make_client(async_transport):
            pass
        assert async_transport.closed


class TestConstruction:
    def test_from_config(self, async_transport):
        config = ClientConfig(token="t", base_url="https://eu.edstem.org", user_agent="ua", timeout=5)
        client = EdClient.from_config(config, transport=async_transport)
        assert client.base_url == "https://eu.edstem.org"
        assert client.user_agent == "ua"
        assert client.transport is async_transport

    def test_default_transport(self):
        client = EdClient("t", timeout=12)
        assert isinstance(client.transport, AiohttpTransport)
        assert client.transport.timeout == 12
        assert client.base_url == DEFAULT_BASE_URL


class TestSyncClient:
    """The blocking client runs the same pipeline"""

    def test_course_threads(self, sync_transport):
        sync_transport.body = payloads.dumps(payloads.course_threads())
        with SyncEdClient("secret-token", transport=sync_transport) as client:
            listing = client.get_course_threads(CourseID(1234))
        assert listing.threads[0].number == 17
        assert sync_transport.last["params"] == [("limit", "20"), ("offset", "0"), ("sort", "new")]
        assert sync_transport.last["headers"]["Authorization"] == "Bearer secret-token"
        assert sync_transport.closed

    def test_thread_by_number(self, sync_transport):
        sync_transport.body = payloads.dumps(payloads.thread())
        thread = SyncEdClient("t", transport=sync_transport).get_thread_by_number(CourseID(1234), 17)
        assert thread.number == 17

    def test_decode_error(self, sync_transport):
        sync_transport.body = b"{"
        with pytest.raises(DecodeError):
            SyncEdClient("t", transport=sync_transport).get_self_user()

    def test_default_transport(self):
        assert isinstance(SyncEdClient("t").transport, RequestsTransport)


class TestAiohttpTransport:
    """Against a real aiohttp server"""

    async def test_round_trip(self):
        seen = {}

        async def handler(request):
            seen["headers"] = dict(request.headers)
            seen["query"] = list(request.query.items())
            return web.json_response(payloads.course_threads())

        app = web.Application()
        app.router.add_get("/api/courses/1234/threads", handler)
        async with test_utils.TestServer(app) as server:
            async with EdClient("tok", base_url=str(server.make_url("/"))) as client:
                options = GetCourseThreadsOptions(filter=FilterKey.UNREAD)
                listing = await client.get_course_threads(CourseID(1234), options)

        assert listing.threads[0].id == ThreadID(700)
        assert seen["headers"]["Authorization"] == "Bearer tok"
        assert seen["headers"]["User-Agent"] == DEFAULT_USER_AGENT
        assert seen["query"] == [("limit", "20"), ("offset", "0"), ("sort", "new"), ("filter", "unread")]

    async def test_status_is_passed_through(self):
        async def handler(request):
            return web.json_response({"code": "forbidden", "message": "no access"}, status=403)

        app = web.Application()
        app.router.add_get("/api/user", handler)
        async with test_utils.TestServer(app) as server:
            transport = AiohttpTransport()
            try:
                response = await transport.request(
                    "GET", str(server.make_url("/api/user")), headers={}
                )
            finally:
                await transport.close()
        assert response.status == 403
        assert not response.ok
        assert json.loads(response.body)["message"] == "no access"

    async def test_connection_refused(self, unused_tcp_port):
        transport = AiohttpTransport(timeout=5)
        try:
            with pytest.raises(TransportError) as excinfo:
                await transport.request(
                    "GET", f"http://127.0.0.1:{unused_tcp_port}/api/user", headers={}
                )
        finally:
            await transport.close()
        assert excinfo.value.__cause__ is not None

    async def test_timeout(self):
        async def slow(request):
            await asyncio.sleep(2)
            return web.json_response({})

        app = web.Application()
        app.router.add_get("/api/user", slow)
        async with test_utils.TestServer(app) as server:
            transport = AiohttpTransport(timeout=0.2)
            try:
                with pytest.raises(TransportError):
                    await transport.request("GET", str(server.make_url("/api/user")), headers={})
            finally:
                await transport.close()


class TestRequestsTransport:
    def test_response(self):
        session = Mock(spec=requests.Session)
        session.request.return_value = Mock(
            status_code=200, content=b"{}", url="https://us.edstem.org/api/user"
        )
        transport = RequestsTransport(timeout=3, session=session)
        response = transport.request(
            "GET", "https://us.edstem.org/api/user", headers={"A": "b"}, params=[("limit", "1")]
        )
        assert response.status == 200
        assert response.body == b"{}"
        session.request.assert_called_once_with(
            "GET",
            "https://us.edstem.org/api/user",
            headers={"A": "b"},
            params=[("limit", "1")],
            data=None,
            timeout=3,
        )

    @pytest.mark.parametrize(
        "error", [requests.ConnectionError("refused"), requests.Timeout("slow")]
    )
    def test_failures_are_wrapped(self, error):
        with patch.object(requests.Session, "request", side_effect=error):
            transport = RequestsTransport()
            with pytest.raises(TransportError) as excinfo:
                transport.request("GET", "https://us.edstem.org/api/user", headers={})
        assert excinfo.value.__cause__ is error

    def test_borrowed_session_is_not_closed(self):
        session = Mock(spec=requests.Session)
        RequestsTransport(session=session).close()
        session.close.assert_not_called()
