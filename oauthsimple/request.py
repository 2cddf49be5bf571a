"""
Building signed OAuth 1.0a requests.

build() turns credentials, a target URL and any extra parameters into a
SignedRequest. Request token, access token and protected resource requests
are signed the same way and differ only in which token pair they carry.
"""

import enum
import random
import time

from oauthlib.oauth1.rfc5849 import parameters as rfc5849_parameters

from oauthsimple import signature
from oauthsimple.encoding import as_pairs, split_url, urlencode
from oauthsimple.exceptions import MissingCredentials

OAUTH_VERSION = '1.0'


class RequestKind(enum.Enum):
    REQUEST_TOKEN = 'request_token'
    ACCESS_TOKEN = 'access_token'
    PROTECTED_RESOURCE = 'protected_resource'

    def token_pair(self, credentials):
        """
        The (token, secret) pair this kind of request is signed with.
        """
        if self is RequestKind.ACCESS_TOKEN:
            return credentials.request_token, credentials.request_token_secret
        if self is RequestKind.PROTECTED_RESOURCE:
            return credentials.access_token, credentials.access_token_secret
        return None, None


class RandomNonceGenerator(object):
    """
    Unsigned 32 bit nonces from a random source.

    Uses the operating system's source unless given another object with
    getrandbits(), e.g. a seeded random.Random.
    """

    def __init__(self, source=None):
        self.source = source or random.SystemRandom()

    def next(self):
        return self.source.getrandbits(32)


class SignedRequest(object):
    """
    A request whose parameters include a computed oauth_signature.
    """

    def __init__(self, method, url, params, consumer_secret,
                 token_secret=None,
                 signature_method=signature.DEFAULT_SIGNATURE_METHOD):
        self.method = method.upper()
        self.url = url
        self.params = list(params)
        self.consumer_secret = consumer_secret
        self.token_secret = token_secret
        self.signature_method = signature_method

    def get(self, name, default=None):
        for key, value in self.params:
            if key == name:
                return value
        return default

    @property
    def signature(self):
        return self.get('oauth_signature')

    @property
    def oauth_params(self):
        return [(k, v) for k, v in self.params if k.startswith('oauth_')]

    def verify(self):
        """
        Recompute the signature from this request's own parameters and
        compare it with the one it carries.
        """
        if self.signature is None:
            return False
        return signature.verify(
            self.method, self.url, self.params, self.consumer_secret,
            self.token_secret, self.signature, self.signature_method)

    def to_postdata(self):
        return urlencode(self.params)

    def to_url(self):
        return '%s?%s' % (self.url, self.to_postdata())

    def to_header(self, realm=None):
        """
        Render the oauth_ parameters as an Authorization header value.
        """
        headers = rfc5849_parameters.prepare_headers(
            self.oauth_params, realm=realm)
        return headers['Authorization']

    def __repr__(self):
        return '<SignedRequest %s %s>' % (self.method, self.url)


def generate_timestamp():
    return str(int(time.time()))


def generate_nonce(nonce_generator=None):
    return str((nonce_generator or RandomNonceGenerator()).next())


def build(kind, credentials, url, method='GET', extra_params=None,
          signature_method=signature.DEFAULT_SIGNATURE_METHOD,
          nonce_generator=None, timestamp=None, nonce=None, callback=None,
          verifier=None):
    """
    Assemble and sign a request of the given kind.

    Query parameters already on `url` are moved into the parameter set.
    Caller parameters that collide with a protocol parameter this function
    sets are replaced by the generated value.

    Raises MissingCredentials, InvalidURL or UnsupportedSignatureMethod.
    """
    if credentials is None or not (credentials.consumer_key
                                   and credentials.consumer_secret):
        raise MissingCredentials('A consumer key and secret are required')
    signer = signature.get_signature_method(signature_method)

    base_url, query = split_url(url)
    token, token_secret = kind.token_pair(credentials)

    oauth_params = [('oauth_consumer_key', credentials.consumer_key)]
    if token:
        oauth_params.append(('oauth_token', token))
    oauth_params.extend([
        ('oauth_signature_method', signer.name),
        ('oauth_timestamp', str(timestamp) if timestamp is not None
         else generate_timestamp()),
        ('oauth_nonce', str(nonce) if nonce is not None
         else generate_nonce(nonce_generator)),
        ('oauth_version', OAUTH_VERSION),
    ])
    if callback and kind is RequestKind.REQUEST_TOKEN:
        oauth_params.append(('oauth_callback', callback))
    if verifier and kind is RequestKind.ACCESS_TOKEN:
        oauth_params.append(('oauth_verifier', verifier))

    generated = set(k for k, _ in oauth_params) | {'oauth_signature'}
    params = [(k, v) for k, v in query + as_pairs(extra_params)
              if k not in generated]
    params.extend(oauth_params)

    params.append(('oauth_signature', signature.sign(
        method, base_url, params, credentials.consumer_secret, token_secret,
        signer)))
    return SignedRequest(method, base_url, params,
                         credentials.consumer_secret, token_secret, signer.name)

