import random

from ..cosutils import get_timestamp
from .querystringbuilder import QuerystringBuilder
from .stssigner import StsSigner


class FederationTokenReqBuilder(object):
    """
    The request builder is responsible for building the GetFederationToken requests using HTTP GET.

    Keyword arguments:
    credentials -- The COSCredentials object containing the secret id and secret key
    region -- The region sent with the request
    host -- The host name of the STS endpoint, it is part of the signed string
    """
    _ACTION = "GetFederationToken"
    _API_VERSION = "2018-08-13"
    _METHOD = "GET"
    _NONCE_RANGE = (10000, 2 ** 31 - 1)
    TOKEN_KEY = "Token"

    def __init__(self, credentials, region, host):
        self.credentials = credentials
        self.region = region
        self.host = host
        self.signer = StsSigner(credentials, host, self._METHOD)
        self.querystring_builder = QuerystringBuilder()
        self._random = random.SystemRandom()

    def create_signed_request(self, request_map):
        """ Creates a ready to send querystring with the Signature parameter appended """
        params = self._get_request_map()
        params.update(request_map)
        params[StsSigner.SIGNATURE_KEY] = self.signer.sign(params)
        return self.querystring_builder.build_querystring(params)

    def _get_request_map(self):
        """
        Creates a map of the common request parameters. Every value is kept as a string
        since the parameters are signed unencoded.
        """
        request_map = {
            "Action": self._ACTION,
            "Version": self._API_VERSION,
            "Region": self.region,
            "SecretId": self.credentials.secret_id,
            "Timestamp": str(get_timestamp()),
            "Nonce": str(self._random.randint(*self._NONCE_RANGE)),
        }
        if self.credentials.token:
            request_map[self.TOKEN_KEY] = self.credentials.token
        return request_map
