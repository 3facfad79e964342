"""Tests for the URL liveness checker."""

import asyncio
import time

import httpx

from newshub.links.checker import LivenessChecker


def make_checker(handler) -> LivenessChecker:
    return LivenessChecker(timeout=1.0, transport=httpx.MockTransport(handler))


class TestLivenessChecker:
    def test_reachable_url(self):
        methods = []

        def handler(request):
            methods.append(request.method)
            return httpx.Response(200)

        result = asyncio.run(make_checker(handler).check("https://example.com/a"))

        assert result.ok
        assert result.status == 200
        assert not result.redirected
        assert methods == ["HEAD"]

    def test_error_status_does_not_retry_with_get(self):
        methods = []

        def handler(request):
            methods.append(request.method)
            return httpx.Response(404)

        result = asyncio.run(make_checker(handler).check("https://example.com/missing"))

        assert not result.ok
        assert result.status == 404
        assert methods == ["HEAD"]

    def test_head_transport_error_falls_back_to_get(self):
        def handler(request):
            if request.method == "HEAD":
                raise httpx.ConnectError("HEAD refused", request=request)
            return httpx.Response(200)

        result = asyncio.run(make_checker(handler).check("https://example.com/a"))

        assert result.ok
        assert result.status == 200

    def test_both_methods_fail(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        result = asyncio.run(make_checker(handler).check("https://example.com/a"))

        assert not result.ok
        assert result.status == 0
        assert result.error == "connection refused"

    def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("too slow", request=request)

        result = asyncio.run(make_checker(handler).check("https://example.com/slow"))

        assert not result.ok
        assert result.error == "Request timed out"

    def test_redirects_are_followed(self):
        def handler(request):
            if request.url.host == "old.example.com":
                return httpx.Response(301, headers={"Location": "https://new.example.com/a"})
            return httpx.Response(200)

        result = asyncio.run(make_checker(handler).check("http://old.example.com/a"))

        assert result.ok
        assert result.redirected
        assert result.final_url == "https://new.example.com/a"

    def test_sends_user_agent(self):
        agents = []

        def handler(request):
            agents.append(request.headers["User-Agent"])
            return httpx.Response(200)

        checker = LivenessChecker(user_agent="TestAgent/1.0", transport=httpx.MockTransport(handler))
        asyncio.run(checker.check("https://example.com/"))

        assert agents == ["TestAgent/1.0"]

    def test_check_many_keeps_input_order(self):
        def handler(request):
            return httpx.Response(200 if request.url.path == "/ok" else 500)

        urls = ["https://example.com/ok", "https://example.com/fail", "https://example.com/ok?x=1"]
        results = asyncio.run(make_checker(handler).check_many(urls))

        assert [r.url for r in results] == urls
        assert [r.ok for r in results] == [True, False, True]

    def test_hanging_server_is_cut_off_by_the_deadline(self):
        async def handler(request):
            await asyncio.sleep(5)
            return httpx.Response(200)

        checker = LivenessChecker(timeout=0.2, transport=httpx.MockTransport(handler))
        started = time.monotonic()
        result = asyncio.run(checker.check("https://example.com/hang"))

        assert not result.ok
        assert result.error == "Request timed out"
        assert time.monotonic() - started < 2

    def test_get_fallback_does_not_read_the_body(self):
        async def slow_body():
            for _ in range(10):
                await asyncio.sleep(0.5)
                yield b"x" * 1024

        def handler(request):
            if request.method == "HEAD":
                raise httpx.ConnectError("HEAD refused", request=request)
            return httpx.Response(200, content=slow_body())

        started = time.monotonic()
        result = asyncio.run(make_checker(handler).check("https://example.com/big.mp4"))

        assert result.ok
        assert result.status == 200
        assert time.monotonic() - started < 1.0
