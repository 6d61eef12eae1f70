import os
import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer
from cryptography.fernet import Fernet

os.environ['ENVIRONMENT'] = 'testing'
os.environ.setdefault('LOG_DIR', 'test_logs')

from linkedin_publisher.core import LinkedInPlugin, NoticeLog, SettingsStore
from linkedin_publisher.models import Identity
from linkedin_publisher.utils.crypto import FernetEncryption


class FakeLinkedIn:
    """In-process stand-in for the LinkedIn REST API that records every call."""

    def __init__(self):
        self.calls = []
        self.posts = []
        self.userinfo_status = 200
        self.userinfo_body = {"sub": "999", "name": "Test Member"}
        self.post_status = 201
        self.post_error_body = None
        self.base_url = None

    def app(self) -> web.Application:
        app = web.Application()
        app.router.add_get('/v2/userinfo', self.userinfo)
        app.router.add_post('/v2/posts', self.create_post)
        return app

    async def userinfo(self, request: web.Request) -> web.Response:
        self.calls.append(('GET', request.path, {k.lower(): v for k, v in request.headers.items()}, None))
        if isinstance(self.userinfo_body, dict):
            return web.json_response(self.userinfo_body, status=self.userinfo_status)
        return web.Response(text=self.userinfo_body, status=self.userinfo_status)

    async def create_post(self, request: web.Request) -> web.Response:
        payload = await request.json()
        self.calls.append(('POST', request.path, {k.lower(): v for k, v in request.headers.items()}, payload))
        if self.post_status != 201 and self.post_error_body is not None:
            return web.Response(body=self.post_error_body, status=self.post_status, content_type="text/html", charset="utf-8")
        if self.post_status != 201:
            return web.json_response({"message": "Not enough permissions"}, status=self.post_status)
        self.posts.append(payload)
        return web.Response(status=201, headers={'x-restli-id': f'urn:li:share:{len(self.posts)}'})


@pytest_asyncio.fixture
async def linkedin():
    """Running fake LinkedIn API; ``base_url`` points at its /v2 root."""
    fake = FakeLinkedIn()
    server = TestServer(fake.app())
    await server.start_server()
    fake.base_url = str(server.make_url('/v2'))
    yield fake
    await server.close()


@pytest_asyncio.fixture
async def unreachable_base_url():
    """Base URL of a server that has already been shut down."""
    server = TestServer(web.Application())
    await server.start_server()
    url = str(server.make_url('/v2'))
    await server.close()
    return url


@pytest.fixture
def identity():
    return Identity.parse("999")


@pytest.fixture
def crypto():
    return FernetEncryption(key=Fernet.generate_key().decode())


@pytest.fixture
def store(tmp_path, crypto):
    return SettingsStore(path=str(tmp_path / 'settings.json'), crypto=crypto)


@pytest.fixture
def notices():
    return NoticeLog()


@pytest.fixture
def make_plugin(store, notices):
    """Build a loaded plugin talking to the given base URL."""
    def _make(base_url=None, access_token="", person_urn=""):
        store.update(access_token=access_token, person_urn=person_urn)
        store.save()
        plugin = LinkedInPlugin(store, notify=notices, base_url=base_url)
        plugin.load()
        return plugin
    return _make
