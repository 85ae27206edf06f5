"""
OAuth 1.0a request signing (HMAC-SHA1).

Only query-string and oauth_* parameters are signed: request bodies sent to
TON are binary, never form-encoded.
"""
from typing import Callable, Dict, List, Optional, Tuple
from urllib.parse import quote, urlsplit, urlunsplit, parse_qsl
import base64
import binascii
import time

from Crypto.Hash import HMAC, SHA1
from Crypto.Random import get_random_bytes

SIGNATURE_METHOD = 'HMAC-SHA1'
OAUTH_VERSION = '1.0'


def percent_encode(value: str) -> str:
    """RFC 3986 encoding as OAuth 1.0a requires (only unreserved chars kept)."""
    return quote(str(value), safe='~')


def generate_nonce() -> str:
    """32 hex chars of randomness."""
    return binascii.hexlify(get_random_bytes(16)).decode('ascii')


def normalize_url(url: str) -> str:
    """Base string URI: scheme and host lower-cased, default port, query and fragment dropped."""
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    netloc = parts.netloc.lower()
    if (scheme == 'https' and netloc.endswith(':443')) or (scheme == 'http' and netloc.endswith(':80')):
        netloc = netloc.rsplit(':', 1)[0]
    return urlunsplit((scheme, netloc, parts.path or '/', '', ''))


def signature_base_string(
    method: str,
    url: str,
    params: List[Tuple[str, str]]
) -> str:
    """
    Build the signature base string.

    Args:
        method: HTTP method
        url: Full request URL (its query parameters are added to params)
        params: oauth_* parameters
    """
    all_params = list(params) + parse_qsl(urlsplit(url).query, keep_blank_values=True)
    encoded = sorted(
        (percent_encode(key), percent_encode(value)) for key, value in all_params
    )
    param_string = '&'.join(f"{key}={value}" for key, value in encoded)
    return '&'.join([
        method.upper(),
        percent_encode(normalize_url(url)),
        percent_encode(param_string),
    ])


def sign(base_string: str, consumer_secret: str, token_secret: str) -> str:
    """HMAC-SHA1 signature, base64 encoded."""
    key = f"{percent_encode(consumer_secret)}&{percent_encode(token_secret)}"
    mac = HMAC.new(key.encode('utf-8'), base_string.encode('utf-8'), digestmod=SHA1)
    return base64.b64encode(mac.digest()).decode('ascii')


class OAuth1Authorizer:
    """
    Produces Authorization header values for one set of user credentials.

    Example:
        >>> auth = OAuth1Authorizer('ck', 'cs', 'tok', 'ts')
        >>> auth.authorization_header('POST', 'https://ton.twitter.com/1.1/ton/bucket/b')
        'OAuth oauth_consumer_key="ck", ...'
    """

    def __init__(
        self,
        consumer_key: str,
        consumer_secret: str,
        token: str,
        token_secret: str,
        nonce_factory: Optional[Callable[[], str]] = None,
        clock: Optional[Callable[[], float]] = None
    ):
        self._consumer_key = consumer_key
        self._consumer_secret = consumer_secret
        self._token = token
        self._token_secret = token_secret
        self._nonce_factory = nonce_factory or generate_nonce
        self._clock = clock or time.time

    def oauth_params(self) -> Dict[str, str]:
        """Fresh protocol parameters (new nonce and timestamp each call)."""
        return {
            'oauth_consumer_key': self._consumer_key,
            'oauth_nonce': self._nonce_factory(),
            'oauth_signature_method': SIGNATURE_METHOD,
            'oauth_timestamp': str(int(self._clock())),
            'oauth_token': self._token,
            'oauth_version': OAUTH_VERSION,
        }

    def authorization_header(self, method: str, url: str) -> str:
        """Sign a request and return the Authorization header value."""
        params = self.oauth_params()
        base_string = signature_base_string(method, url, list(params.items()))
        params['oauth_signature'] = sign(
            base_string, self._consumer_secret, self._token_secret
        )
        return 'OAuth ' + ', '.join(
            f'{percent_encode(key)}="{percent_encode(value)}"'
            for key, value in sorted(params.items())
        )
