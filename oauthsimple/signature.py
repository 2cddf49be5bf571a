"""
OAuth 1.0a request signing.

A signature is computed over the signature base string::

    METHOD&escape(normalized url)&escape(normalized parameters)

with a key built from the consumer secret and the token secret. HMAC-SHA1
is the default method; HMAC-SHA256 and PLAINTEXT are also available. The
signing primitives are oauthlib's; methods are looked up by name here so an
unknown name fails before anything is sent.
"""

from oauthlib.common import safe_string_equals
from oauthlib.oauth1.rfc5849 import signature as rfc5849_signature

from oauthsimple.encoding import normalize_parameters, normalize_url
from oauthsimple.exceptions import UnsupportedSignatureMethod

DEFAULT_SIGNATURE_METHOD = 'HMAC-SHA1'


def signature_base_string(method, url, params):
    return rfc5849_signature.signature_base_string(
        method.upper(), normalize_url(url), normalize_parameters(params))


class SignatureMethod(object):
    name = None

    def sign(self, base_string, consumer_secret, token_secret=None):
        raise NotImplementedError


class HMACSignature(SignatureMethod):
    def __init__(self, name, signer):
        self.name = name
        self.signer = signer

    def sign(self, base_string, consumer_secret, token_secret=None):
        return self.signer(base_string, consumer_secret, token_secret)


class PlaintextSignature(SignatureMethod):
    """
    The signature is the signing key itself; the base string is ignored.
    """
    name = 'PLAINTEXT'

    def sign(self, base_string, consumer_secret, token_secret=None):
        return rfc5849_signature.sign_plaintext(consumer_secret, token_secret)


SIGNATURE_METHODS = {}


def register_signature_method(method):
    SIGNATURE_METHODS[method.name.upper()] = method
    return method


register_signature_method(
    HMACSignature('HMAC-SHA1', rfc5849_signature.sign_hmac_sha1))
register_signature_method(
    HMACSignature('HMAC-SHA256', rfc5849_signature.sign_hmac_sha256))
register_signature_method(PlaintextSignature())


def get_signature_method(name):
    """
    Look up a signature method by name, ignoring case.
    """
    if isinstance(name, SignatureMethod):
        return name
    try:
        return SIGNATURE_METHODS[(name or '').upper()]
    except (KeyError, AttributeError):
        raise UnsupportedSignatureMethod(
            'Unsupported signature method %r (expected one of %s)'
            % (name, ', '.join(sorted(SIGNATURE_METHODS))))


def sign(method, url, params, consumer_secret, token_secret=None,
         signature_method=DEFAULT_SIGNATURE_METHOD):
    """
    Sign a request and return the value for oauth_signature.

    `url` may carry a query string; it is dropped from the base string
    URI, so any query parameters must already be in `params`.
    """
    signer = get_signature_method(signature_method)
    base_string = signature_base_string(method, url, params)
    return signer.sign(base_string, consumer_secret, token_secret)


def verify(method, url, params, consumer_secret, token_secret, signature,
           signature_method=DEFAULT_SIGNATURE_METHOD):
    expected = sign(method, url, params, consumer_secret, token_secret,
                    signature_method)
    return safe_string_equals(expected, signature or '')
