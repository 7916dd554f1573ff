import base64
import hmac

from hashlib import sha1

from ..errors import AuthError


class StsSigner(object):
    """
    The STS signer is responsible for creating the Signature parameter of requests sent to the
    platform API which issues temporary credentials.

    Unlike the object storage Signer, the query string is signed with its values left unencoded.
    Percent-encoding happens only when the final request URL is assembled.

    Keyword arguments:
    credentials -- The COSCredentials object that contains secret_id and secret_key
    host -- the host name of the platform API endpoint, e.g. sts.tencentcloudapi.com
    method -- the HTTP method used to send the request (default GET)
    """

    SIGNATURE_KEY = "Signature"

    def __init__(self, credentials, host, method="GET"):
        self.credentials = credentials
        self.host = host
        self.method = method

    def sign(self, params):
        """ Creates the base64 encoded signature for the parameters, any existing Signature entry is ignored """
        canonical_querystring = self._build_canonical_querystring(params)
        string_to_sign = self._build_string_to_sign(canonical_querystring)
        return self._build_signature(string_to_sign)

    def _build_canonical_querystring(self, params):
        sorted_params = sorted((str(key), str(value)) for key, value in params.items() if key != self.SIGNATURE_KEY)
        return "&".join(key + "=" + value for key, value in sorted_params)

    def _build_string_to_sign(self, canonical_querystring):
        return self.method.upper() + self.host + "/?" + canonical_querystring

    def _build_signature(self, string_to_sign):
        key = self.credentials.secret_key
        try:
            if isinstance(key, str):
                key = key.encode("utf-8")
            digest = hmac.new(key, string_to_sign.encode("utf-8"), sha1).digest()
        except (TypeError, ValueError) as e:
            raise AuthError("HMAC key error: " + str(e))
        return base64.b64encode(digest).decode("ascii")
