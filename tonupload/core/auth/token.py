"""
Application-only bearer token exchange (OAuth2 client credentials).
"""
from typing import Optional
from urllib.parse import quote
import asyncio
import base64
import json

import aiohttp

from ..config import TonConfig
from ..exceptions import TransportError
from ..logging import get_logger

logger = get_logger('tonupload.auth.token')

GRANT_BODY = b'grant_type=client_credentials'


def basic_credentials(consumer_key: str, consumer_secret: str) -> str:
    """Basic auth value: base64 of url-encoded key and secret joined by a colon."""
    raw = f"{quote(consumer_key, safe='')}:{quote(consumer_secret, safe='')}"
    return base64.b64encode(raw.encode('utf-8')).decode('ascii')


async def fetch_bearer_token(
    consumer_key: str,
    consumer_secret: str,
    config: Optional[TonConfig] = None,
    session: Optional[aiohttp.ClientSession] = None
) -> str:
    """
    Exchange consumer credentials for an app-only bearer token.
    
    Args:
        consumer_key: Application consumer key
        consumer_secret: Application consumer secret
        config: Client configuration (token_url, TLS, timeouts)
        session: Optional session to reuse
        
    Returns:
        The access token
        
    Raises:
        TransportError: On network failure or an unusable response
    """
    config = config or TonConfig.default()
    headers = {
        'Authorization': f"Basic {basic_credentials(consumer_key, consumer_secret)}",
        'Content-Type': 'application/x-www-form-urlencoded;charset=UTF-8',
    }
    
    owns_session = session is None
    if owns_session:
        session = aiohttp.ClientSession(
            connector=aiohttp.TCPConnector(ssl=config.ssl.create_ssl_context()),
            **config.get_session_kwargs()
        )
    
    logger.debug(f"Requesting bearer token from {config.token_url}")
    try:
        async with session.post(config.token_url, data=GRANT_BODY, headers=headers) as resp:
            status = resp.status
            body = await resp.read()
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        raise TransportError(f"Bearer token request failed: {e!r}") from e
    finally:
        if owns_session:
            await session.close()
    
    if not 200 <= status < 300:
        raise TransportError("Bearer token request failed", status=status, body=body)
    
    try:
        payload = json.loads(body)
    except ValueError as e:
        raise TransportError("Bearer token response is not JSON", status=status, body=body) from e
    
    token = payload.get('access_token') if isinstance(payload, dict) else None
    token_type = payload.get('token_type', 'bearer') if isinstance(payload, dict) else None
    if not token or str(token_type).lower() != 'bearer':
        raise TransportError("Bearer token response has no bearer access_token", status=status, body=body)
    
    logger.info("Bearer token obtained")
    return token
