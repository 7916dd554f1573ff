import json
import re
import os

import requests
from requests.adapters import HTTPAdapter
from requests.sessions import Session
from requests.utils import quote
from tempfile import gettempdir
from urllib.parse import urlparse

from ..clientinfo import CLIENT_NAME, CLIENT_VERSION
from ..coscredentials import COSCredentials
from ..errors import ConfigError, ErrorKind, ResponseParseError, ServerError, TransportError
from ..logger.logger import get_logger
from ..policy import Policy
from .federationtokenreqbuilder import FederationTokenReqBuilder
from .stssigner import StsSigner


class StsClient(object):
    """
    This is a simple HTTPClient wrapper which obtains temporary credentials scoped by a Policy.

    Keyword arguments:
    credentials -- the COSCredentials object containing the permanent secret id and secret key
    region -- the region sent with each request
    endpoint -- the STS endpoint (default https://sts.tencentcloudapi.com/)
    proxy_server_name -- the proxy server used for HTTPS requests (default None)
    proxy_server_port -- the port of the proxy server (default None)
    debug -- write a trace of every request to the temporary directory (default False)
    connection_timeout -- the amount of time in seconds to wait for establishing server connection
    response_timeout -- the amount of time in seconds to wait for the server response
    """

    _LOGGER = get_logger(__name__)
    DEFAULT_ENDPOINT = "https://sts.tencentcloudapi.com/"
    DEFAULT_DURATION_SECONDS = 1800
    DEFAULT_NAME = "temp-user"
    _DEFAULT_CONNECTION_TIMEOUT = 5
    _DEFAULT_RESPONSE_TIMEOUT = 10
    _TOTAL_RETRIES = 1
    _LOG_FILE_MAX_SIZE = 10*1024*1024
    _TRACE_FILE_NAME = "cos_sts_request_trace_log"
    _UNTRACED_PARAMETERS = (FederationTokenReqBuilder.TOKEN_KEY, StsSigner.SIGNATURE_KEY)

    def __init__(self, credentials, region, endpoint=DEFAULT_ENDPOINT, proxy_server_name=None, proxy_server_port=None,
                 debug=False, connection_timeout=_DEFAULT_CONNECTION_TIMEOUT,
                 response_timeout=_DEFAULT_RESPONSE_TIMEOUT):
        self._validate_and_set_endpoint(endpoint)
        self._check_configuration_integrity(credentials, region)
        self.federation_token_req_builder = FederationTokenReqBuilder(credentials, region, urlparse(endpoint).netloc)
        self.timeout = (connection_timeout, response_timeout)
        self.proxy_server_name = proxy_server_name
        self.proxy_server_port = proxy_server_port
        self.debug = debug
        self._prepare_session()

    def get_credentials(self, policy, duration_seconds=DEFAULT_DURATION_SECONDS, name=DEFAULT_NAME):
        """
        Requests temporary credentials limited by the policy. The policy is either a Policy object
        or its JSON document.
        """
        request_map = {
            "Name": name,
            "Policy": quote(self._policy_to_json(policy), safe=''),
            "DurationSeconds": str(duration_seconds),
        }
        request = self.federation_token_req_builder.create_signed_request(request_map)
        try:
            result = self._run_request(request)
        except requests.Timeout as e:
            self._log_request_failure(e)
            raise TransportError("Request timed out: " + str(e), ErrorKind.TIMEOUT)
        except requests.RequestException as e:
            self._log_request_failure(e)
            raise TransportError("Request failed: " + str(e), ErrorKind.CONNECTION)
        if not result.ok:
            self._LOGGER.warning("Could not get temporary credentials, status: " + str(result.status_code))
            raise ServerError(result.status_code, '', result.text or result.reason or "Unknown error")
        return self._parse_credentials(result.text)

    @staticmethod
    def _policy_to_json(policy):
        if isinstance(policy, Policy):
            return policy.to_json()
        return policy

    def _parse_credentials(self, content):
        try:
            document = json.loads(content)
        except ValueError as e:
            raise ResponseParseError("Cannot parse STS response: " + str(e) + "\nResponse: " + content)
        if not isinstance(document, dict):
            raise ResponseParseError("Unexpected STS response: " + content)
        if "Response" in document:
            return self._parse_response(document["Response"])
        return self._parse_legacy_response(document)

    def _parse_response(self, response):
        error = response.get("Error")
        if error:
            self._LOGGER.warning("STS API error: " + str(error.get("Code")) + " - " + str(error.get("Message")))
            raise ServerError(None, error.get("Code", ''), error.get("Message", ''))
        cred = response.get("Credentials")
        if not cred:
            raise ResponseParseError("No credentials in response.")
        return self._build_credentials(cred.get("TmpSecretId"), cred.get("TmpSecretKey"), cred.get("Token"),
                                       response.get("ExpiredTime", cred.get("ExpiredTime")),
                                       response.get("Expiration"))

    def _parse_legacy_response(self, response):
        code = response.get("code")
        if code != 0:
            self._LOGGER.warning("STS API error: " + str(code) + " - " + str(response.get("message")))
            raise ServerError(None, str(code), str(response.get("message", '')))
        data = response.get("data")
        if not data or not data.get("credentials"):
            raise ResponseParseError("No data in legacy response.")
        cred = data["credentials"]
        return self._build_credentials(cred.get("tmpSecretId"), cred.get("tmpSecretKey"), cred.get("sessionToken"),
                                       data.get("expiredTime"), None)

    def _build_credentials(self, secret_id, secret_key, token, expired_time, expiration):
        if not secret_id or not secret_key or not token:
            raise ResponseParseError("Incomplete credentials retrieved.")
        return COSCredentials(secret_id, secret_key, token, expired_time, expiration)

    def _prepare_session(self):
        self.session = Session()
        if self.proxy_server_name:
            proxy_server = self.proxy_server_name
            self._LOGGER.info("Using proxy server: " + proxy_server)
            if self.proxy_server_port:
                proxy_server = proxy_server + ":" + str(self.proxy_server_port)
                self._LOGGER.info("Using proxy server port: " + str(self.proxy_server_port))
            proxies = {'https': proxy_server}
            self.session.proxies.update(proxies)
        else:
            self._LOGGER.info("No proxy server is in use")
        self.session.mount("http://", HTTPAdapter(max_retries=self._TOTAL_RETRIES))
        self.session.mount("https://", HTTPAdapter(max_retries=self._TOTAL_RETRIES))

    def _validate_and_set_endpoint(self, endpoint):
        pattern = re.compile("http[s]?://*/")
        if pattern.match(endpoint) or "localhost" in endpoint:
            self.endpoint = endpoint
        else:
            msg = "Provided endpoint '" + endpoint + "' is not a valid URL."
            self._LOGGER.error(msg)
            raise StsClient.InvalidEndpointException(msg)

    def _check_configuration_integrity(self, credentials, region):
        if not credentials:
            self._raise_config_error("COS credentials are missing.")
        if not credentials.secret_id:
            self._raise_config_error("SecretId cannot be empty.")
        if not credentials.secret_key:
            self._raise_config_error("SecretKey cannot be empty.")
        if not region:
            self._raise_config_error("Region cannot be empty.")

    def _raise_config_error(self, msg):
        self._LOGGER.error(msg)
        raise ConfigError(msg)

    def _log_request_failure(self, exception):
        self._LOGGER.warning("Could not get temporary credentials using the following endpoint: '" + self.endpoint
                             + "'. [Exception: " + str(exception) + "]")

    def _get_custom_headers(self):
        """ Returns dictionary of HTTP headers to be attached to each request """
        return {"User-Agent": self._get_user_agent_header()}

    def _get_user_agent_header(self):
        return CLIENT_NAME + "/" + str(CLIENT_VERSION)

    def _run_request(self, request):
        """
        Executes HTTP GET request with timeout using the endpoint defined upon client creation.
        """
        if self.debug:
            file_path = os.path.join(gettempdir(), self._TRACE_FILE_NAME)
            if os.path.isfile(file_path) and os.path.getsize(file_path) > self._LOG_FILE_MAX_SIZE:
                os.remove(file_path)
            with open(file_path, "a") as logfile:
                logfile.write("curl -i -v --connect-timeout " + str(self.timeout[0]) + " -m " + str(self.timeout[1])
                              + " -A \"" + self._get_user_agent_header() + "\" '" + self.endpoint + "?"
                              + self._get_traced_querystring(request) + "'")
                logfile.write("\n\n")
        return self.session.get(self.endpoint + "?" + request, headers=self._get_custom_headers(), timeout=self.timeout)

    def _get_traced_querystring(self, request):
        """ Returns the querystring without the session token and the signature """
        return "&".join(entry for entry in request.split("&")
                        if entry.split("=", 1)[0] not in self._UNTRACED_PARAMETERS)

    class InvalidEndpointException(ConfigError):
        pass
