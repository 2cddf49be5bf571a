"""
Exceptions raised by oauthsimple.

Everything derives from OAuthError. Failures reported by a provider over
HTTP are OAuthHTTPError subclasses and keep the response they came from.
Network errors from requests are not wrapped.
"""


class OAuthError(Exception):
    pass


class MissingCredentials(OAuthError):
    """The consumer key or consumer secret is missing."""


class InvalidURL(OAuthError):
    pass


class MissingEndpoint(InvalidURL):
    """An endpoint the operation needs was never configured."""


class UnsupportedSignatureMethod(OAuthError):
    pass


class SignatureVerificationError(OAuthError):
    """A freshly signed request failed its own verification."""


class InvalidStateError(OAuthError):
    """The operation is not valid in the client's current token state."""


class Unauthorized(OAuthError):
    """A protected resource was requested without an access token."""

    def __init__(self, message='Unauthorized.'):
        super(Unauthorized, self).__init__(message)


class OAuthHTTPError(OAuthError):
    """
    The provider answered with a non-success status.
    """

    def __init__(self, message, status=None, reason=None, response=None):
        super(OAuthHTTPError, self).__init__(message)
        self.status = status
        self.reason = reason
        self.response = response

    @property
    def status_line(self):
        if self.status is None:
            return ''
        return ('%s %s' % (self.status, self.reason or '')).strip()

    @classmethod
    def from_response(cls, message, response):
        status = getattr(response, 'status_code', None)
        reason = getattr(response, 'reason', None)
        status_line = ('%s %s' % (status, reason or '')).strip()
        return cls('%s: %s' % (message, status_line),
                   status=status, reason=reason, response=response)


class TokenRequestFailed(OAuthHTTPError):
    pass


class AccessTokenFailed(OAuthHTTPError):
    pass


class RequestFailed(OAuthHTTPError):
    pass
