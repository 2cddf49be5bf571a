"""
The credential set and endpoint URLs held by a single OAuth client.
"""

import enum

from oauthsimple.encoding import split_url
from oauthsimple.exceptions import MissingCredentials, MissingEndpoint

TOKEN_FIELDS = (
    'consumer_key',
    'consumer_secret',
    'request_token',
    'request_token_secret',
    'access_token',
    'access_token_secret',
)

ENDPOINT_FIELDS = (
    'authorization_url',
    'request_token_url',
    'access_token_url',
)


class TokenState(enum.Enum):
    UNAUTHORIZED = 'unauthorized'
    REQUEST_TOKEN_OBTAINED = 'request_token_obtained'
    AUTHORIZED = 'authorized'


class Credentials(object):
    """
    Consumer key and secret plus the request and access token pairs.

    The consumer pair is required. Token pairs are None until obtained.
    """

    def __init__(self, consumer_key=None, consumer_secret=None,
                 request_token=None, request_token_secret=None,
                 access_token=None, access_token_secret=None):
        for name, value in (('consumer_key', consumer_key),
                            ('consumer_secret', consumer_secret)):
            if not value:
                raise MissingCredentials(
                    "Missing required parameter '%s'" % name)
        self._consumer_key = consumer_key
        self._consumer_secret = consumer_secret
        self.request_token = request_token
        self.request_token_secret = request_token_secret
        self.access_token = access_token
        self.access_token_secret = access_token_secret

    @classmethod
    def from_dict(cls, tokens):
        """
        Build credentials from a mapping such as a loaded token file.
        Unknown keys are ignored.
        """
        return cls(**dict((k, v) for k, v in tokens.items()
                          if k in TOKEN_FIELDS))

    @property
    def consumer_key(self):
        return self._consumer_key

    @consumer_key.setter
    def consumer_key(self, value):
        if not value:
            raise MissingCredentials("Missing required parameter 'consumer_key'")
        self._consumer_key = value

    @property
    def consumer_secret(self):
        return self._consumer_secret

    @consumer_secret.setter
    def consumer_secret(self, value):
        if not value:
            raise MissingCredentials(
                "Missing required parameter 'consumer_secret'")
        self._consumer_secret = value

    @property
    def authorized(self):
        """
        Whether both halves of the access token are present. The provider
        may still reject them.
        """
        return bool(self.access_token and self.access_token_secret)

    @property
    def has_request_token(self):
        return bool(self.request_token and self.request_token_secret)

    @property
    def state(self):
        if self.authorized:
            return TokenState.AUTHORIZED
        if self.has_request_token:
            return TokenState.REQUEST_TOKEN_OBTAINED
        return TokenState.UNAUTHORIZED

    def set_request_token(self, token, secret):
        self.request_token = token
        self.request_token_secret = secret

    def set_access_token(self, token, secret):
        self.access_token = token
        self.access_token_secret = secret

    def clear_request_token(self):
        self.request_token = None
        self.request_token_secret = None

    def as_dict(self):
        return dict((name, getattr(self, name)) for name in TOKEN_FIELDS
                    if getattr(self, name))

    def __repr__(self):
        return '<Credentials consumer_key=%r state=%s>' % (
            self.consumer_key, self.state.value)


class EndpointSet(object):
    """
    The provider's authorization, request token and access token URLs.
    """

    def __init__(self, authorization_url=None, request_token_url=None,
                 access_token_url=None):
        self._urls = {}
        self.authorization_url = authorization_url
        self.request_token_url = request_token_url
        self.access_token_url = access_token_url

    def _get(self, name):
        return self._urls.get(name)

    def _set(self, name, url):
        if url:
            split_url(url)
        self._urls[name] = url or None

    authorization_url = property(
        lambda self: self._get('authorization_url'),
        lambda self, url: self._set('authorization_url', url))
    request_token_url = property(
        lambda self: self._get('request_token_url'),
        lambda self, url: self._set('request_token_url', url))
    access_token_url = property(
        lambda self: self._get('access_token_url'),
        lambda self, url: self._set('access_token_url', url))

    def require(self, name):
        if name not in ENDPOINT_FIELDS:
            raise KeyError(name)
        url = self._get(name)
        if not url:
            raise MissingEndpoint('No %s configured' % name)
        return url

    def as_dict(self):
        return dict((name, self._get(name)) for name in ENDPOINT_FIELDS)
