# File: tests/test_fetcher.py
import asyncio

import pytest
from aiohttp import web

from agent_ready.crawler.errors import FetchError
from agent_ready.crawler.fetcher import DEFAULT_USER_AGENT, Fetcher


def make_app() -> web.Application:
    app = web.Application()

    async def html(_):
        return web.Response(text="<h1>ok</h1>", content_type="text/html")

    async def xhtml(_):
        return web.Response(text="<html/>", content_type="application/xhtml+xml")

    async def xml(_):
        return web.Response(text="<urlset/>", content_type="application/xml")

    async def plain(_):
        return web.Response(text="just text", content_type="text/plain")

    async def server_error(_):
        return web.Response(status=500, text="<h1>boom</h1>", content_type="text/html")

    async def redirect(_):
        raise web.HTTPFound("/html")

    async def agent(request):
        return web.Response(text=request.headers.get("User-Agent", ""), content_type="text/html")

    async def slow(_):
        await asyncio.sleep(1.0)
        return web.Response(text="late", content_type="text/html")

    app.router.add_get("/html", html)
    app.router.add_get("/xhtml", xhtml)
    app.router.add_get("/xml", xml)
    app.router.add_get("/plain", plain)
    app.router.add_get("/error", server_error)
    app.router.add_get("/redirect", redirect)
    app.router.add_get("/agent", agent)
    app.router.add_get("/slow", slow)
    return app


@pytest.mark.asyncio()
@pytest.mark.parametrize("path", ["/html", "/xhtml", "/xml"])
async def test_fetch_accepts_html_and_xml(serve, path):
    base = await serve(make_app())
    async with Fetcher() as fetcher:
        assert await fetcher.fetch(f"{base}{path}")


@pytest.mark.asyncio()
async def test_fetch_rejects_other_content_types(serve):
    base = await serve(make_app())
    async with Fetcher() as fetcher:
        with pytest.raises(FetchError, match="Not HTML"):
            await fetcher.fetch(f"{base}/plain")


@pytest.mark.asyncio()
@pytest.mark.parametrize("path,status", [("/error", 500), ("/missing", 404)])
async def test_fetch_rejects_non_success_status(serve, path, status):
    base = await serve(make_app())
    async with Fetcher() as fetcher:
        with pytest.raises(FetchError) as info:
            await fetcher.fetch(f"{base}{path}")
    assert info.value.status == status
    assert info.value.url == f"{base}{path}"


@pytest.mark.asyncio()
async def test_fetch_follows_redirects(serve):
    base = await serve(make_app())
    async with Fetcher() as fetcher:
        assert await fetcher.fetch(f"{base}/redirect") == "<h1>ok</h1>"


@pytest.mark.asyncio()
async def test_fetch_sends_user_agent(serve):
    base = await serve(make_app())
    async with Fetcher() as fetcher:
        assert await fetcher.fetch(f"{base}/agent") == DEFAULT_USER_AGENT
    assert DEFAULT_USER_AGENT.startswith("AgentReady/")


@pytest.mark.asyncio()
async def test_fetch_timeout_becomes_fetch_error(serve):
    base = await serve(make_app())
    async with Fetcher(timeout=0.2) as fetcher:
        with pytest.raises(FetchError, match="timed out"):
            await fetcher.fetch(f"{base}/slow")


@pytest.mark.asyncio()
async def test_fetch_connection_error_becomes_fetch_error(unused_tcp_port):
    async with Fetcher(timeout=2.0) as fetcher:
        with pytest.raises(FetchError):
            await fetcher.fetch(f"http://127.0.0.1:{unused_tcp_port}/nothing-listens")


@pytest.mark.asyncio()
async def test_fetch_requires_open_session():
    with pytest.raises(RuntimeError):
        await Fetcher().fetch("http://127.0.0.1/")


@pytest.mark.asyncio()
async def test_injected_session_is_left_open(serve):
    from aiohttp import ClientSession

    base = await serve(make_app())
    async with ClientSession() as session:
        async with Fetcher(session=session, user_agent="Custom/1.0") as fetcher:
            assert await fetcher.fetch(f"{base}/agent") == "Custom/1.0"
        assert not session.closed
