"""Pytest fixtures for tonupload tests."""
import json
import re
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Dict, List

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from tonupload.core.auth.models import TonResponse
from tonupload.core.config import TonConfig

CONTENT_RANGE = re.compile(r'^bytes (\d+)-(\d+)/(\d+)$')


@dataclass
class SentRequest:
    """One request seen by ScriptedSigner."""
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b''


class ScriptedSigner:
    """
    Signer double that answers from a fixed list of responses.

    Exceptions in the list are raised instead of returned. Running out of
    responses fails the test.
    """

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls: List[SentRequest] = []
        self.config = TonConfig()

    async def send(self, method, url, headers=None, body=b''):
        self.calls.append(SentRequest(method, url, dict(headers or {}), body))
        if not self.responses:
            raise AssertionError(f"Unexpected request: {method} {url}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def puts(self) -> List[SentRequest]:
        return [c for c in self.calls if c.method == 'PUT']


class FakeTon:
    """
    In-process TON server.

    Accepts single-shot and resumable uploads into ``objects``, serves them
    back to bearer-authenticated GETs and hands out bearer tokens.
    """

    def __init__(self, chunk_size: int = 4, bearer_token: str = 'app-token'):
        self.chunk_size = chunk_size
        self.bearer_token = bearer_token
        self.objects: Dict[str, bytes] = {}
        self.sessions: Dict[str, dict] = {}
        self.requests: List[SentRequest] = []
        self.fail_put_status = None
        self.corrupt_downloads = False
        self._counter = 0

    def build_app(self) -> web.Application:
        app = web.Application()
        app.router.add_post('/1.1/ton/bucket/{bucket}', self.create)
        app.router.add_put('/1.1/ton/bucket/{bucket}/{key}', self.put_chunk)
        app.router.add_get('/1.1/ton/bucket/{bucket}/{key}', self.get_object)
        app.router.add_post('/oauth2/token', self.token)
        return app

    @asynccontextmanager
    async def serve(self, tmp_path, **overrides):
        """Run the server and yield a TonConfig pointing at it."""
        async with TestServer(self.build_app()) as server:
            options = {
                'domain': f"{server.host}:{server.port}",
                'scheme': 'http',
                'single_chunk_threshold': 8,
                'token_url': str(server.make_url('/oauth2/token')),
                'staging_path': tmp_path / 'staging.bin',
            }
            options.update(overrides)
            yield TonConfig(**options)

    async def _record(self, request) -> bytes:
        body = await request.read()
        self.requests.append(SentRequest(
            request.method, str(request.rel_url), dict(request.headers), body
        ))
        return body

    def _next_key(self) -> str:
        self._counter += 1
        return f"obj{self._counter}"

    async def create(self, request):
        body = await self._record(request)
        if 'Authorization' not in request.headers:
            return web.Response(status=401, text='unauthorized')

        bucket = request.match_info['bucket']
        key = self._next_key()
        if request.query.get('resumable') == 'true':
            self.sessions[key] = {
                'total': int(request.headers['X-TON-Content-Length']),
                'content_type': request.headers['X-TON-Content-Type'],
                'data': bytearray(),
            }
            return web.Response(status=202, headers={
                'Location': f"/1.1/ton/bucket/{bucket}/{key}?resumable=true&resumeId=1",
                'X-TON-Min-Chunk-Size': str(self.chunk_size),
            })

        self.objects[key] = body
        return web.Response(status=201, headers={'Location': f"/1.1/ton/bucket/{bucket}/{key}"})

    async def put_chunk(self, request):
        body = await self._record(request)
        key = request.match_info['key']
        session = self.sessions.get(key)
        if session is None:
            return web.Response(status=404, text='no such session')
        if self.fail_put_status:
            return web.Response(status=self.fail_put_status, text='chunk rejected')

        match = CONTENT_RANGE.match(request.headers.get('Content-Range', ''))
        if not match or int(match.group(1)) != len(session['data']):
            return web.Response(status=400, text='bad range')

        session['data'] += body
        if len(session['data']) >= session['total']:
            self.objects[key] = bytes(session['data'])
            return web.Response(status=201, headers={
                'Location': f"/1.1/ton/bucket/{request.match_info['bucket']}/{key}"
            })
        return web.Response(status=308, headers={'Range': f"bytes=0-{len(session['data']) - 1}"})

    async def get_object(self, request):
        await self._record(request)
        if request.headers.get('Authorization') != f"Bearer {self.bearer_token}":
            return web.Response(status=403, text='app auth required')
        data = self.objects.get(request.match_info['key'])
        if data is None:
            return web.Response(status=404, text='not found')
        if self.corrupt_downloads:
            data = data[::-1] + b'!'
        return web.Response(body=data)

    async def token(self, request):
        body = await self._record(request)
        if not request.headers.get('Authorization', '').startswith('Basic '):
            return web.Response(status=403, text='basic auth required')
        if body != b'grant_type=client_credentials':
            return web.Response(status=400, text='bad grant')
        return web.json_response({'token_type': 'bearer', 'access_token': self.bearer_token})


@pytest.fixture
def scripted_signer():
    """Factory for ScriptedSigner."""
    return ScriptedSigner


@pytest.fixture
def fake_ton():
    """Fresh in-process TON server (started with ``async with fake_ton.serve(tmp_path)``)."""
    return FakeTon()


@pytest.fixture
def make_file(tmp_path):
    """Write a file under tmp_path and return its path."""
    def _make(name: str, content: bytes):
        path = tmp_path / name
        path.write_bytes(content)
        return path
    return _make


@pytest.fixture
def credentials_file(tmp_path, monkeypatch):
    """Credentials JSON with user and app fields; TON_* env vars cleared."""
    for var in ('TON_CONSUMER_KEY', 'TON_CONSUMER_SECRET', 'TON_ACCESS_TOKEN',
                'TON_ACCESS_TOKEN_SECRET', 'TON_CREDENTIALS', 'TON_DOMAIN'):
        monkeypatch.delenv(var, raising=False)
    path = tmp_path / 'credentials.json'
    path.write_text(json.dumps({
        'consumer_key': 'ck',
        'consumer_secret': 'cs',
        'token': 'tok',
        'secret': 'ts',
    }))
    return path


@pytest.fixture
def ton_response():
    """Factory for TonResponses; keyword headers are normalized (location=, x_ton_min_chunk_size=)."""
    def _make(status: int = 201, **headers):
        return TonResponse(status, {k.replace('_', '-'): v for k, v in headers.items()})
    return _make
