"""Tests for the bearer token exchange."""
import base64

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from tonupload.core.auth.token import basic_credentials, fetch_bearer_token
from tonupload.core.config import TonConfig
from tonupload.core.exceptions import TransportError


def token_app(status=200, payload=None, raw=None):
    """Token endpoint answering with a fixed response and recording requests."""
    seen = []

    async def token(request):
        seen.append({
            'authorization': request.headers.get('Authorization'),
            'content_type': request.headers.get('Content-Type'),
            'body': await request.read(),
        })
        if raw is not None:
            return web.Response(status=status, body=raw)
        return web.json_response(payload, status=status)

    app = web.Application()
    app.router.add_post('/oauth2/token', token)
    return app, seen


def config_for(server) -> TonConfig:
    return TonConfig(token_url=str(server.make_url('/oauth2/token')))


class TestBasicCredentials:
    """Test suite for basic_credentials."""

    def test_plain_values(self):
        assert basic_credentials('key', 'secret') == base64.b64encode(b'key:secret').decode()

    def test_values_are_url_encoded_first(self):
        assert basic_credentials('k y', 's:t') == base64.b64encode(b'k%20y:s%3At').decode()


class TestFetchBearerToken:
    """Test suite for fetch_bearer_token."""

    @pytest.mark.asyncio
    async def test_success(self):
        app, seen = token_app(payload={'token_type': 'bearer', 'access_token': 'AAAA'})
        async with TestServer(app) as server:
            token = await fetch_bearer_token('ck', 'cs', config_for(server))

        assert token == 'AAAA'
        assert seen[0]['authorization'] == f"Basic {basic_credentials('ck', 'cs')}"
        assert seen[0]['content_type'].startswith('application/x-www-form-urlencoded')
        assert seen[0]['body'] == b'grant_type=client_credentials'

    @pytest.mark.asyncio
    async def test_rejected_credentials(self):
        app, _ = token_app(status=403, payload={'errors': [{'code': 99}]})
        async with TestServer(app) as server:
            with pytest.raises(TransportError) as exc_info:
                await fetch_bearer_token('ck', 'bad', config_for(server))

        assert exc_info.value.status == 403

    @pytest.mark.asyncio
    async def test_not_json(self):
        app, _ = token_app(raw=b'<html>oops</html>')
        async with TestServer(app) as server:
            with pytest.raises(TransportError, match="not JSON"):
                await fetch_bearer_token('ck', 'cs', config_for(server))

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [
        {'token_type': 'bearer'},
        {'token_type': 'mac', 'access_token': 'AAAA'},
        ['AAAA'],
    ])
    async def test_unusable_payload(self, payload):
        app, _ = token_app(payload=payload)
        async with TestServer(app) as server:
            with pytest.raises(TransportError, match="no bearer access_token"):
                await fetch_bearer_token('ck', 'cs', config_for(server))
