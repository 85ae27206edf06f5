"""
Authentication for TON requests.

Two modes: user OAuth 1.0a signing and application-only bearer tokens.
"""
from .models import UserAuth, AppAuth, AuthProfile, TonResponse, normalize_headers
from .oauth1 import OAuth1Authorizer
from .signer import AuthSigner, OAuth1Signer, BearerSigner, create_signer
from .token import fetch_bearer_token

__all__ = [
    'UserAuth',
    'AppAuth',
    'AuthProfile',
    'TonResponse',
    'normalize_headers',
    'OAuth1Authorizer',
    'AuthSigner',
    'OAuth1Signer',
    'BearerSigner',
    'create_signer',
    'fetch_bearer_token',
]
