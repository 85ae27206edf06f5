"""Tests for OAuth 1.0a signing."""
import pytest

from tonupload.core.auth.oauth1 import (
    OAuth1Authorizer,
    generate_nonce,
    normalize_url,
    percent_encode,
    sign,
    signature_base_string
)

# Published HMAC-SHA1 example for POST statuses/update
CONSUMER_KEY = 'xvz1evFS4wEEPTGEFPHBog'
CONSUMER_SECRET = 'kAcSOqF21Fu85e7zjz7ZN2U4ZRhfV3WpwPAoE3Z7kBw'
TOKEN = '370773112-GmHxMAgYyLbNEtIKZeRNFsMKPR9EyMZeS9weJAEb'
TOKEN_SECRET = 'LswwdoUaIvS8ltyTt5jkRh4J50vUPVVHtR2YPi5kE'
NONCE = 'kYjzVBB8Y0ZFabxSWbWovY3uYSQ2pTgmZeNu2VS4cg'
TIMESTAMP = 1318622958
URL = (
    'https://api.twitter.com/1.1/statuses/update.json'
    '?include_entities=true'
    '&status=Hello%20Ladies%20%2B%20Gentlemen%2C%20a%20signed%20OAuth%20request%21'
)
SIGNATURE = 'hCtSmYh+iHYCEqBWrE7C7hYmtUk='


@pytest.fixture
def authorizer():
    return OAuth1Authorizer(
        CONSUMER_KEY,
        CONSUMER_SECRET,
        TOKEN,
        TOKEN_SECRET,
        nonce_factory=lambda: NONCE,
        clock=lambda: TIMESTAMP
    )


class TestPercentEncode:
    """Test suite for percent_encode."""

    def test_reserved_characters(self):
        assert percent_encode('Ladies + Gentlemen') == 'Ladies%20%2B%20Gentlemen'
        assert percent_encode('a,b!') == 'a%2Cb%21'

    def test_unreserved_characters_kept(self):
        assert percent_encode('AZaz09-._~') == 'AZaz09-._~'

    def test_slash_is_encoded(self):
        assert percent_encode('/1.1/ton') == '%2F1.1%2Fton'


class TestNormalizeUrl:
    """Test suite for normalize_url."""

    def test_drops_query_and_default_port(self):
        assert normalize_url('HTTPS://Ton.Twitter.com:443/1.1/ton/bucket/b?resumable=true') == \
            'https://ton.twitter.com/1.1/ton/bucket/b'

    def test_keeps_other_ports(self):
        assert normalize_url('http://127.0.0.1:8080/x') == 'http://127.0.0.1:8080/x'


class TestSigning:
    """Test suite for signature generation."""

    def test_known_signature(self, authorizer):
        """Test the published example signs to the published signature."""
        params = authorizer.oauth_params()
        base = signature_base_string('POST', URL, list(params.items()))

        assert base.startswith('POST&https%3A%2F%2Fapi.twitter.com%2F1.1%2Fstatuses%2Fupdate.json&')
        assert sign(base, CONSUMER_SECRET, TOKEN_SECRET) == SIGNATURE

    def test_authorization_header(self, authorizer):
        header = authorizer.authorization_header('POST', URL)

        assert header.startswith('OAuth ')
        assert 'oauth_signature="hCtSmYh%2BiHYCEqBWrE7C7hYmtUk%3D"' in header
        assert f'oauth_consumer_key="{CONSUMER_KEY}"' in header
        assert 'oauth_signature_method="HMAC-SHA1"' in header
        assert f'oauth_timestamp="{TIMESTAMP}"' in header
        assert 'oauth_version="1.0"' in header

    def test_header_parameters_sorted(self, authorizer):
        header = authorizer.authorization_header('PUT', 'https://ton.twitter.com/x')
        keys = [part.split('=')[0] for part in header[len('OAuth '):].split(', ')]

        assert keys == sorted(keys)

    def test_method_is_signed(self, authorizer):
        """Test the same URL signed for different methods differs."""
        post = authorizer.authorization_header('POST', URL)
        put = authorizer.authorization_header('PUT', URL)

        assert post != put

    def test_query_parameters_are_signed(self, authorizer):
        plain = authorizer.authorization_header('POST', 'https://ton.twitter.com/1.1/ton/bucket/b')
        resumable = authorizer.authorization_header(
            'POST', 'https://ton.twitter.com/1.1/ton/bucket/b?resumable=true'
        )

        assert plain != resumable

    def test_fresh_nonce_per_request(self):
        auth = OAuth1Authorizer('ck', 'cs', 'tok', 'ts')

        assert auth.oauth_params()['oauth_nonce'] != auth.oauth_params()['oauth_nonce']

    def test_generate_nonce(self):
        nonce = generate_nonce()
        assert len(nonce) == 32
        int(nonce, 16)
