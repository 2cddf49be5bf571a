"""
A simple OAuth 1.0a client.

OAuthClient walks one user through the three-legged handshake and then
signs requests for protected resources::

    client = OAuthClient(
        CONSUMER_KEY, CONSUMER_SECRET,
        request_token_url='https://api.example.com/oauth/request_token',
        authorization_url='https://api.example.com/oauth/authorize',
        access_token_url='https://api.example.com/oauth/access_token')

    if not client.authorized:
        print('Go to %s' % client.get_authorization_url())
        verifier = input('Then enter the PIN: ')
        client.request_access_token(verifier=verifier)

    response = client.make_restricted_request(
        'https://api.example.com/1/me.json')

Token state is mutated in place, so a client must not be shared between
threads without locking. Use one client per user.
"""

import requests
import structlog

from oauthsimple import request as oauth_request
from oauthsimple import oauth
from oauthsimple.credentials import (
    Credentials, EndpointSet, TokenState, TOKEN_FIELDS)
from oauthsimple.encoding import parse_qs, split_url, urlencode
from oauthsimple.exceptions import (
    AccessTokenFailed,
    InvalidStateError,
    RequestFailed,
    SignatureVerificationError,
    TokenRequestFailed,
    Unauthorized,
)
from oauthsimple.request import RequestKind
from oauthsimple.signature import (
    DEFAULT_SIGNATURE_METHOD, get_signature_method)

logger = structlog.get_logger(__name__)

BODY_METHODS = ('POST', 'PUT')


def _delegate(store, name):
    return property(
        lambda self: getattr(getattr(self, store), name),
        lambda self, value: setattr(getattr(self, store), name, value))


class OAuthClient(object):
    """
    Holds one set of credentials and the provider's endpoint URLs.

    The consumer key and secret are required; a MissingCredentials error is
    raised straight away without them. Pass previously saved request or
    access tokens to resume a handshake or skip it.
    """

    consumer_key = _delegate('credentials', 'consumer_key')
    consumer_secret = _delegate('credentials', 'consumer_secret')
    request_token = _delegate('credentials', 'request_token')
    request_token_secret = _delegate('credentials', 'request_token_secret')
    access_token = _delegate('credentials', 'access_token')
    access_token_secret = _delegate('credentials', 'access_token_secret')

    authorization_url = _delegate('endpoints', 'authorization_url')
    request_token_url = _delegate('endpoints', 'request_token_url')
    access_token_url = _delegate('endpoints', 'access_token_url')

    def __init__(self, consumer_key=None, consumer_secret=None,
                 request_token=None, request_token_secret=None,
                 access_token=None, access_token_secret=None,
                 authorization_url=None, request_token_url=None,
                 access_token_url=None,
                 signature_method=DEFAULT_SIGNATURE_METHOD, callback=None,
                 session=None, nonce_generator=None, timeout=None):
        self.credentials = Credentials(
            consumer_key, consumer_secret,
            request_token=request_token,
            request_token_secret=request_token_secret,
            access_token=access_token,
            access_token_secret=access_token_secret)
        self.endpoints = EndpointSet(
            authorization_url=authorization_url,
            request_token_url=request_token_url,
            access_token_url=access_token_url)
        self.signature_method = signature_method
        self.callback = callback
        self.nonce_generator = (nonce_generator
                                or oauth_request.RandomNonceGenerator())
        self.timeout = timeout
        self._owns_session = session is None
        self.session = session or requests.Session()

    @classmethod
    def from_token_file(cls, filename, **kwargs):
        """
        Create a client from the tokens saved in `filename`. Keyword
        arguments override values from the file.
        """
        options = dict((k, v) for k, v in oauth.load_tokens(filename).items()
                       if k in TOKEN_FIELDS)
        options.update(kwargs)
        return cls(**options)

    def save_tokens(self, filename):
        oauth.save_tokens(filename, self.tokens)

    @property
    def tokens(self):
        return self.credentials.as_dict()

    @property
    def signature_method(self):
        return self._signature_method

    @signature_method.setter
    def signature_method(self, name):
        self._signature_method = get_signature_method(name).name

    @property
    def state(self):
        return self.credentials.state

    @property
    def authorized(self):
        """
        Whether the client has an access token and secret. They may still
        be rejected by the provider.
        """
        return self.credentials.authorized

    def request_request_token(self):
        """
        Obtain a request token and secret and store them.

        Called by get_authorization_url when no request token is held.
        """
        if self.state is not TokenState.UNAUTHORIZED:
            raise InvalidStateError(
                'Cannot request a request token in state %s'
                % self.state.value)

        url = self.endpoints.require('request_token_url')
        response = self._make_request(
            RequestKind.REQUEST_TOKEN, url, 'GET',
            error_class=TokenRequestFailed, callback=self.callback)
        token, secret = self._parse_token_response(
            response, url, TokenRequestFailed)

        self.credentials.set_request_token(token, secret)
        logger.info('request_token_obtained', url=split_url(url)[0])
        return token, secret

    def get_authorization_url(self, **params):
        """
        Get the URL the user must visit to authorize this client.

        Any keyword arguments, such as oauth_callback, are added to the
        URL's query along with oauth_token.
        """
        url = self.endpoints.require('authorization_url')
        if not self.credentials.has_request_token:
            self.request_request_token()

        base_url, query = split_url(url)
        query.extend((k, v) for k, v in params.items() if k != 'oauth_token')
        query.append(('oauth_token', self.request_token))
        return '%s?%s' % (base_url, urlencode(query))

    def request_access_token(self, verifier=None):
        """
        Exchange the authorized request token for an access token.

        The user must already have approved the request token at the URL
        given by get_authorization_url. On success the access token pair is
        stored, the request token pair is dropped and the access pair is
        returned.
        """
        if self.state is not TokenState.REQUEST_TOKEN_OBTAINED:
            raise InvalidStateError(
                'Cannot request an access token in state %s; '
                'obtain and authorize a request token first'
                % self.state.value)

        url = self.endpoints.require('access_token_url')
        response = self._make_request(
            RequestKind.ACCESS_TOKEN, url, 'GET',
            error_class=AccessTokenFailed, verifier=verifier)
        token, secret = self._parse_token_response(
            response, url, AccessTokenFailed)

        self.credentials.set_access_token(token, secret)
        self.credentials.clear_request_token()
        logger.info('access_token_obtained', url=split_url(url)[0])
        return token, secret

    def make_restricted_request(self, url, method='GET', **extra_params):
        """
        Make a signed request for a protected resource and return the
        requests.Response. Keyword arguments are sent as extra parameters.

        Raises Unauthorized, without touching the network, when no access
        token is held.
        """
        if not self.authorized:
            raise Unauthorized()
        return self._make_request(
            RequestKind.PROTECTED_RESOURCE, url, method,
            extra_params=dict(extra_params), error_class=RequestFailed)

    def _make_request(self, kind, url, method, extra_params=None,
                      error_class=RequestFailed, **kwargs):
        signed = oauth_request.build(
            kind, self.credentials, url, method, extra_params=extra_params,
            signature_method=self.signature_method,
            nonce_generator=self.nonce_generator, **kwargs)
        if not signed.verify():
            raise SignatureVerificationError(
                "Couldn't verify the request signature. "
                "Check the OAuth parameters.")

        logger.debug('oauth_request', kind=kind.value,
                     method=signed.method, url=signed.url)
        if signed.method in BODY_METHODS:
            response = self.session.request(
                signed.method, signed.url, data=signed.to_postdata(),
                headers={'Content-Type': oauth.FORM_CONTENT_TYPE},
                timeout=self.timeout)
        else:
            response = self.session.request(
                signed.method, signed.to_url(), timeout=self.timeout)

        try:
            response.raise_for_status()
        except requests.HTTPError as e:
            logger.warning('oauth_request_failed', kind=kind.value,
                           method=signed.method, url=signed.url,
                           status=response.status_code)
            raise error_class.from_response(
                '%s on %s failed' % (signed.method, signed.url),
                response) from e
        return response

    def _parse_token_response(self, response, url, error_class):
        try:
            values = dict(parse_qs(response.content))
        except UnicodeDecodeError as e:
            raise error_class(
                '%s replied with a body that is not UTF-8' % split_url(url)[0],
                status=response.status_code,
                reason=getattr(response, 'reason', None),
                response=response) from e
        token = values.get('oauth_token')
        secret = values.get('oauth_token_secret')
        if not (token and secret):
            logger.warning('token_response_incomplete',
                           url=split_url(url)[0], keys=sorted(values))
            raise error_class(
                '%s did not reply with a token and secret'
                % split_url(url)[0],
                status=response.status_code,
                reason=getattr(response, 'reason', None), response=response)
        return token, secret

    def close(self):
        if self._owns_session:
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def __repr__(self):
        return '<OAuthClient consumer_key=%r state=%s>' % (
            self.consumer_key, self.state.value)
