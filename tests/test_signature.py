import re
from unittest import TestCase

import requests
from requests_oauthlib import OAuth1

from oauthsimple import signature
from oauthsimple.encoding import unescape
from oauthsimple.exceptions import UnsupportedSignatureMethod


EXAMPLE_PARAMS = [
    ('oauth_consumer_key', 'key'),
    ('oauth_token', 'accesskey'),
    ('oauth_signature_method', 'HMAC-SHA1'),
    ('oauth_timestamp', '1191242090'),
    ('oauth_nonce', 'hsu94j3884jdopsl'),
    ('oauth_version', '1.0'),
]

PHOTOS_PARAMS = [
    ('file', 'vacation.jpg'),
    ('size', 'original'),
    ('oauth_consumer_key', 'dpf43f3p2l4k3l03'),
    ('oauth_token', 'nnch734d00sl2jdk'),
    ('oauth_signature_method', 'HMAC-SHA1'),
    ('oauth_timestamp', '1191242096'),
    ('oauth_nonce', 'kllo9940pd9333jh'),
    ('oauth_version', '1.0'),
]


class SignatureBaseStringTests(TestCase):

    def test_photos_example_base_string(self):
        base = signature.signature_base_string(
            'get', 'http://photos.example.net/photos', PHOTOS_PARAMS)

        self.assertEqual(
            base,
            'GET&http%3A%2F%2Fphotos.example.net%2Fphotos&file%3Dvacation.jpg'
            '%26oauth_consumer_key%3Ddpf43f3p2l4k3l03%26oauth_nonce%3Dkllo99'
            '40pd9333jh%26oauth_signature_method%3DHMAC-SHA1%26oauth_timestam'
            'p%3D1191242096%26oauth_token%3Dnnch734d00sl2jdk%26oauth_version%'
            '3D1.0%26size%3Doriginal')

    def test_base_string_ignores_parameter_order(self):
        shuffled = list(reversed(PHOTOS_PARAMS))

        self.assertEqual(
            signature.signature_base_string(
                'GET', 'http://photos.example.net/photos', PHOTOS_PARAMS),
            signature.signature_base_string(
                'GET', 'http://photos.example.net/photos', shuffled))

    def test_base_string_normalizes_url(self):
        base = signature.signature_base_string(
            'POST', 'HTTP://Photos.Example.NET:80/photos?ignored=1', [])

        self.assertEqual(base, 'POST&http%3A%2F%2Fphotos.example.net%2Fphotos&')


class SignTests(TestCase):

    def test_hmac_sha1_example(self):
        sig = signature.sign('GET', 'http://example.com/resource',
                             EXAMPLE_PARAMS, 'secret', 'accesssecret')

        self.assertEqual(sig, 'jPynXBKubUdmQ3e0vXk6bg1t4Qs=')

    def test_hmac_sha1_photos_example(self):
        sig = signature.sign('GET', 'http://photos.example.net/photos',
                             PHOTOS_PARAMS, 'kd94hf93k423kf44',
                             'pfkkdhi9sl3r4s00')

        self.assertEqual(sig, 'tR3+Ty81lMeYAr/Fid0kMTYa/WM=')

    def test_signature_is_deterministic(self):
        first = signature.sign('GET', 'http://example.com/resource',
                               EXAMPLE_PARAMS, 'secret', 'accesssecret')
        for _ in range(5):
            self.assertEqual(
                signature.sign('GET', 'http://example.com/resource',
                               EXAMPLE_PARAMS, 'secret', 'accesssecret'),
                first)

    def test_hmac_sha256(self):
        params = [
            ('oauth_consumer_key', 'key'),
            ('oauth_signature_method', 'HMAC-SHA256'),
            ('oauth_timestamp', '1191242090'),
            ('oauth_nonce', '42'),
            ('oauth_version', '1.0'),
        ]
        sig = signature.sign('POST', 'https://api.example.com/request_token',
                             params, 'secret', None, 'HMAC-SHA256')

        self.assertEqual(sig, 'U1q+Ck5L3CSgRcaeEZHtGyUOAtXb9i3S3XQ0e7rRLnw=')

    def test_plaintext_is_the_signing_key(self):
        sig = signature.sign('GET', 'http://example.com/resource',
                             EXAMPLE_PARAMS, 'secret', 'accesssecret',
                             'PLAINTEXT')

        self.assertEqual(sig, 'secret&accesssecret')

    def test_plaintext_without_token_secret(self):
        sig = signature.sign('GET', 'http://example.com/resource', [],
                             'kd94hf93k423kf44', None, 'plaintext')

        self.assertEqual(sig, 'kd94hf93k423kf44&')

    def test_unsupported_method(self):
        with self.assertRaises(UnsupportedSignatureMethod):
            signature.sign('GET', 'http://example.com/resource',
                           EXAMPLE_PARAMS, 'secret', 'accesssecret',
                           'RSA-SHA1')

    def test_lookup_ignores_case(self):
        self.assertEqual(signature.get_signature_method('hmac-sha1').name,
                         'HMAC-SHA1')

    def test_verify(self):
        args = ('GET', 'http://example.com/resource', EXAMPLE_PARAMS,
                'secret', 'accesssecret')

        self.assertTrue(signature.verify(
            *args, signature='jPynXBKubUdmQ3e0vXk6bg1t4Qs='))
        self.assertFalse(signature.verify(
            *args, signature='tR3+Ty81lMeYAr/Fid0kMTYa/WM='))
        self.assertFalse(signature.verify(*args, signature=None))


class ReferenceSignerTests(TestCase):
    """Signatures agree with requests-oauthlib for the same inputs."""

    def reference_signature(self, url, method='GET'):
        auth = OAuth1('key', client_secret='secret',
                      resource_owner_key='accesskey',
                      resource_owner_secret='accesssecret',
                      timestamp='1191242090', nonce='hsu94j3884jdopsl')
        prepared = requests.Request(method, url, auth=auth).prepare()
        header = prepared.headers['Authorization']
        if isinstance(header, bytes):
            header = header.decode('utf-8')
        found = re.search(r'oauth_signature="([^"]+)"', header)
        return unescape(found.group(1))

    def test_matches_reference_without_query(self):
        self.assertEqual(self.reference_signature('http://example.com/resource'),
                         'jPynXBKubUdmQ3e0vXk6bg1t4Qs=')

    def test_matches_reference_with_query(self):
        url = 'https://example.com/resource?b=two%20words&a=1&a=0'
        params = EXAMPLE_PARAMS + [('b', 'two words'), ('a', '1'), ('a', '0')]

        ours = signature.sign('GET', url, params, 'secret', 'accesssecret')

        self.assertEqual(ours, self.reference_signature(url))
