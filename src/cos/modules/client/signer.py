import hmac

from hashlib import sha1

from ..cosutils import to_unix_seconds
from ..errors import AuthError
from .canonicalrequestbuilder import CanonicalRequestBuilder


class Signer(object):
    """
    The signer is responsible for creating the Authorization header value of requests sent
    to the object storage service (bucket and object operations).

    Keyword arguments:
    credentials -- The COSCredentials object that contains secret_id and secret_key
    canonical_request_builder -- the builder of HttpString values (default CanonicalRequestBuilder())
    """

    _ALGORITHM = "sha1"

    def __init__(self, credentials, canonical_request_builder=None):
        self.credentials = credentials
        self.canonical_request_builder = canonical_request_builder or CanonicalRequestBuilder()

    def sign(self, method, path, headers, params, start_time, end_time):
        """ Creates the authorization value for the request, valid between start_time and end_time """
        key_time = self._build_key_time(start_time, end_time)
        sign_key = self._build_sign_key(key_time)
        http_string = self.canonical_request_builder.build_http_string(method, path, params, headers)
        string_to_sign = self._build_string_to_sign(key_time, http_string)
        signature = self._build_signature(sign_key, string_to_sign)
        return self._build_authorization(key_time, headers, params, signature)

    def _build_key_time(self, start_time, end_time):
        return str(to_unix_seconds(start_time)) + ";" + str(to_unix_seconds(end_time))

    def _build_sign_key(self, key_time):
        return self._sign(self.credentials.secret_key, key_time)

    def _build_string_to_sign(self, key_time, http_string):
        return self._ALGORITHM + "\n" + key_time + "\n" + self._hash(http_string) + "\n"

    def _build_signature(self, sign_key, string_to_sign):
        # the derived key is used as the ASCII text of its hex digest, not as raw bytes
        return self._sign(sign_key, string_to_sign)

    def _build_authorization(self, key_time, headers, params, signature):
        builder = self.canonical_request_builder
        return "q-sign-algorithm=" + self._ALGORITHM \
            + "&q-ak=" + str(self.credentials.secret_id) \
            + "&q-sign-time=" + key_time \
            + "&q-key-time=" + key_time \
            + "&q-header-list=" + builder.build_key_list(headers) \
            + "&q-url-param-list=" + builder.build_key_list(params) \
            + "&q-signature=" + signature

    def _hash(self, data):
        return sha1(data.encode("utf-8")).hexdigest()

    def _sign(self, key, msg):
        try:
            if isinstance(key, str):
                key = key.encode("utf-8")
            mac = hmac.new(key, msg.encode("utf-8"), sha1)
        except (TypeError, ValueError) as e:
            raise AuthError("HMAC key error: " + str(e))
        return mac.hexdigest()
