from oauthsimple.client import OAuthClient
from oauthsimple.credentials import Credentials, EndpointSet, TokenState
from oauthsimple.exceptions import (
    AccessTokenFailed,
    InvalidStateError,
    InvalidURL,
    MissingCredentials,
    MissingEndpoint,
    OAuthError,
    OAuthHTTPError,
    RequestFailed,
    SignatureVerificationError,
    TokenRequestFailed,
    Unauthorized,
    UnsupportedSignatureMethod,
)
from oauthsimple.oauth import OAuth, load_tokens, save_tokens
from oauthsimple.request import (
    RandomNonceGenerator, RequestKind, SignedRequest, build)

__version__ = '0.9.0'
