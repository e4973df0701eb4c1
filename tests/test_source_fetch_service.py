"""
Tests for the single-attempt source fetcher
"""
import unittest

import httpx

from iptv_catalog.errors import FETCH_FAILED_MESSAGE, CatalogError, FetchError
from iptv_catalog.services.source_fetch_service import SourceFetcher


URL = "http://example.com/list.m3u"


def make_fetcher(handler) -> tuple[SourceFetcher, httpx.AsyncClient]:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return SourceFetcher(client), client


class TestSourceFetcher(unittest.IsolatedAsyncioTestCase):
    async def test_success_returns_body_text(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, text="#EXTM3U\n")

        fetcher, client = make_fetcher(handler)
        async with client:
            text = await fetcher.fetch(URL)

        self.assertEqual(text, "#EXTM3U\n")
        self.assertEqual(len(requests), 1)
        self.assertEqual(requests[0].method, "GET")
        self.assertEqual(str(requests[0].url), URL)

    async def test_empty_body_is_not_an_error(self):
        fetcher, client = make_fetcher(lambda request: httpx.Response(204))
        async with client:
            self.assertEqual(await fetcher.fetch(URL), "")

    async def test_utf8_body_is_decoded(self):
        body = "卫视频道,#genre#\n湖南卫视,http://a/1\n".encode("utf-8")
        fetcher, client = make_fetcher(
            lambda request: httpx.Response(
                200, content=body, headers={"Content-Type": "text/plain; charset=utf-8"}
            )
        )
        async with client:
            self.assertIn("湖南卫视", await fetcher.fetch(URL))

    async def test_non_success_status_raises_fetch_error(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(404)

        fetcher, client = make_fetcher(handler)
        async with client:
            with self.assertRaises(FetchError) as ctx:
                await fetcher.fetch(URL)

        self.assertEqual(ctx.exception.reason, "http status 404: Not Found")
        self.assertEqual(str(ctx.exception), FETCH_FAILED_MESSAGE)
        self.assertEqual(len(calls), 1)

    async def test_server_error_is_not_retried(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(503)

        fetcher, client = make_fetcher(handler)
        async with client:
            with self.assertRaises(FetchError):
                await fetcher.fetch(URL)

        self.assertEqual(len(calls), 1)

    async def test_transport_error_is_wrapped_with_cause(self):
        def handler(request):
            raise httpx.ConnectError("name resolution failed", request=request)

        fetcher, client = make_fetcher(handler)
        async with client:
            with self.assertRaises(FetchError) as ctx:
                await fetcher.fetch(URL)

        self.assertIsInstance(ctx.exception, CatalogError)
        self.assertIsInstance(ctx.exception.__cause__, httpx.ConnectError)
        self.assertIn("ConnectError", ctx.exception.reason)
        self.assertEqual(str(ctx.exception), FETCH_FAILED_MESSAGE)

    async def test_timeout_is_a_fetch_error(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        fetcher, client = make_fetcher(handler)
        async with client:
            with self.assertRaises(FetchError) as ctx:
                await fetcher.fetch(URL)

        self.assertIsInstance(ctx.exception.__cause__, httpx.TimeoutException)


if __name__ == "__main__":
    unittest.main()
