"""
Register your application with the provider to get a CONSUMER_KEY and
CONSUMER_SECRET.

Users then authorize your application through the three step "oauth
dance" implemented by oauthsimple.client.OAuthClient. That gets you an
access token and access token secret for the user. Save these so the
user does not have to do the dance again.

load_tokens and save_tokens read and write those values in a plain text
token file, one ``key = value`` pair per line. Not terribly exciting.

Finally, with an access token you can sign requests made with the
requests library directly::

    MY_CREDS = os.path.expanduser('~/.my_app_credentials')
    tokens = load_tokens(MY_CREDS)
    if 'access_token' not in tokens:
        client = OAuthClient(CONSUMER_KEY, CONSUMER_SECRET, **URLS)
        print('Go to %s' % client.get_authorization_url())
        input('Then hit return')
        client.request_access_token()
        client.save_tokens(MY_CREDS)
        tokens = load_tokens(MY_CREDS)

    auth = OAuth(tokens['access_token'], tokens['access_token_secret'],
                 CONSUMER_KEY, CONSUMER_SECRET)
    requests.get('https://api.example.com/1/me.json', auth=auth)

"""

import os

import requests_oauthlib
import structlog

from oauthsimple.credentials import Credentials
from oauthsimple.signature import (
    DEFAULT_SIGNATURE_METHOD, get_signature_method)

logger = structlog.get_logger(__name__)

FORM_CONTENT_TYPE = 'application/x-www-form-urlencoded'


def save_tokens(filename, tokens):
    """
    Write a token file holding the given tokens, sorted by key.
    """
    with open(filename, 'w') as oauth_file:
        for key in sorted(tokens):
            print('%s = %s' % (key, tokens[key]), file=oauth_file)
    logger.debug('tokens_saved', filename=filename, keys=sorted(tokens))


def load_tokens(filename):
    """
    Read a token file and return its tokens as a dict.

    Comments and blank lines are skipped, as are lines without '='.
    A missing file yields an empty dict.
    """
    tokens = {}
    if not os.path.isfile(filename):
        return tokens

    with open(filename) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith('#') or '=' not in line:
                continue
            key, value = line.split('=', 1)
            tokens[key.strip()] = value.strip()
    return tokens


class OAuth(requests_oauthlib.OAuth1):
    """
    Sign requests made with the requests library using an access token.

    OAuth parameters go in the Authorization header. Query parameters and
    form-encoded bodies are included in the signature. Extra keyword
    arguments, such as a fixed nonce or timestamp, go to the oauthlib client.
    """

    def __init__(self, token, token_secret, consumer_key, consumer_secret,
                 signature_method=DEFAULT_SIGNATURE_METHOD, realm=None,
                 **kwargs):
        Credentials(consumer_key, consumer_secret)  # raises MissingCredentials
        super(OAuth, self).__init__(
            client_key=consumer_key,
            client_secret=consumer_secret,
            resource_owner_key=token,
            resource_owner_secret=token_secret,
            signature_method=get_signature_method(signature_method).name,
            realm=realm,
            **kwargs)
