import asyncio
import json

import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from cfpurge.client import CloudflareClient


def ok_body(zone: str) -> dict:
    return {"success": True, "errors": [], "messages": [], "result": {"id": zone}}


class FakeCloudflare:
    """Minimal purge_cache endpoint with scripted per-zone responses."""

    def __init__(self) -> None:
        self.responses: dict[str, tuple[int, str, float]] = {}
        self.requests: list[tuple[str, dict, dict[str, str]]] = []
        self.completed: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.base_url = ""

    def respond(self, zone: str, status: int = 200, body=None, delay: float = 0.0, raw: str | None = None):
        text = raw if raw is not None else json.dumps(body if body is not None else ok_body(zone))
        self.responses[zone] = (status, text, delay)

    async def handle(self, request: web.Request) -> web.Response:
        zone = request.match_info["zone"]
        self.requests.append((zone, await request.json(), dict(request.headers)))
        status, text, delay = self.responses.get(zone, (200, json.dumps(ok_body(zone)), 0.0))

        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(delay)
        finally:
            self.in_flight -= 1
        self.completed.append(zone)
        return web.Response(status=status, text=text, content_type="application/json")

    def app(self) -> web.Application:
        app = web.Application()
        app.router.add_delete("/client/v4/zones/{zone}/purge_cache", self.handle)
        return app


@pytest_asyncio.fixture
async def cloudflare():
    fake = FakeCloudflare()
    server = TestServer(fake.app())
    await server.start_server()
    fake.base_url = str(server.make_url("/client/v4/"))
    try:
        yield fake
    finally:
        await server.close()


@pytest_asyncio.fixture
async def client(cloudflare):
    async with CloudflareClient(base_url=cloudflare.base_url, token="secret-token") as client:
        yield client
