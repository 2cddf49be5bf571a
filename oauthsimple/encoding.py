"""
Parameter encoding for OAuth 1.0a.

OAuth percent-encodes with the RFC 3986 unreserved set (A-Z a-z 0-9 - . _ ~)
and nothing else, which is stricter than form encoding. The escaping and
normalization rules come from oauthlib's RFC 5849 implementation; this
module adds the type checks and errors oauthsimple reports. Parameters
travel as lists of (name, value) pairs so repeated names survive; order
only matters once normalize_parameters sorts them for signing.
"""

from urllib.parse import urlsplit, urlunsplit, parse_qsl

from oauthlib.oauth1.rfc5849 import signature as rfc5849_signature
from oauthlib.oauth1.rfc5849 import utils as rfc5849_utils

from oauthsimple.exceptions import InvalidURL

DEFAULT_PORTS = {'http': 80, 'https': 443}


def _require_str(value):
    if not isinstance(value, str):
        raise TypeError('OAuth parameters must be str, got %s'
                        % type(value).__name__)


def escape(value):
    """
    Percent-encode a string per RFC 3986.
    """
    _require_str(value)
    return rfc5849_utils.escape(value)


def unescape(value):
    _require_str(value)
    return rfc5849_utils.unescape(value)


def parse_qs(query):
    """
    Parse a query string or form-encoded body into (name, value) pairs.

    Blank values are kept and the original order is preserved. Bytes are
    decoded as UTF-8.
    """
    if isinstance(query, bytes):
        query = query.decode('utf-8')
    if not query:
        return []
    return parse_qsl(query, keep_blank_values=True)


def urlencode(params):
    """
    Serialize (name, value) pairs as name=value joined by '&', in order.
    """
    return '&'.join('%s=%s' % (escape(k), escape(v))
                    for k, v in as_pairs(params))


def split_url(url):
    """
    Split a URL into its base (no query, no fragment) and its query params.

    Raises InvalidURL if the URL cannot be used as an OAuth request target.
    """
    parts = _split(url)
    base = urlunsplit((parts.scheme, parts.netloc, parts.path, '', ''))
    return base, parse_qs(parts.query)


def normalize_url(url):
    """
    Return the base string URI: scheme and host lower-cased, default port
    dropped, query and fragment removed.
    """
    _split(url)
    try:
        return rfc5849_signature.base_string_uri(url)
    except ValueError as e:
        raise InvalidURL('Invalid URL %r: %s' % (url, e)) from e


def normalize_parameters(params):
    """
    Build the normalized parameter string that goes into the base string.

    Names and values are encoded first and then sorted, by name and then by
    value. oauth_signature is never part of its own base string.
    """
    pairs = [(k, v) for k, v in as_pairs(params) if k != 'oauth_signature']
    for k, v in pairs:
        _require_str(k)
        _require_str(v)
    return rfc5849_signature.normalize_parameters(pairs)


def _split(url):
    if not isinstance(url, str) or not url:
        raise InvalidURL('Invalid URL %r' % (url,))
    try:
        parts = urlsplit(url)
        parts.port  # malformed ports only fail on access
    except ValueError as e:
        raise InvalidURL('Invalid URL %r: %s' % (url, e)) from e
    if parts.scheme.lower() not in DEFAULT_PORTS:
        raise InvalidURL('Unsupported URL scheme in %r' % url)
    if not parts.hostname:
        raise InvalidURL('No host in URL %r' % url)
    return parts


def as_pairs(params):
    if params is None:
        return []
    if hasattr(params, 'items'):
        return list(params.items())
    return list(params)
