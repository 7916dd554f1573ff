import re
import os

import requests
from requests.adapters import HTTPAdapter
from requests.sessions import Session
from tempfile import gettempdir

from ..errors import ConfigError, ErrorKind, ServerError, TransportError
from ..logger.logger import get_logger
from .requestbuilder import RequestBuilder
from .responseparser import parse_error


class CosClient(object):
    """
    This is a simple HTTPClient wrapper which signs and sends bucket and object requests.

    Keyword arguments:
    config_helper -- the ConfigHelper object providing credentials, endpoints, proxy and debug settings
    connection_timeout -- the amount of time in seconds to wait for establishing server connection
                          (default taken from the configuration)
    response_timeout -- the amount of time in seconds to wait for the server response
                        (default taken from the configuration)
    """

    _LOGGER = get_logger(__name__)
    _TOTAL_RETRIES = 1
    _LOG_FILE_MAX_SIZE = 10*1024*1024
    _TRACE_FILE_NAME = "cos_client_request_trace_log"
    _UNTRACED_HEADERS = (RequestBuilder.AUTHORIZATION_HEADER, RequestBuilder.SECURITY_TOKEN_HEADER)

    def __init__(self, config_helper, connection_timeout=None, response_timeout=None):
        self.config = config_helper
        self.request_builder = RequestBuilder(config_helper)
        self._validate_and_set_endpoint(config_helper.bucket_url)
        self.timeout = (connection_timeout or config_helper.connection_timeout,
                        response_timeout or config_helper.timeout)
        self.proxy_server_name = config_helper.proxy_server_name
        self.proxy_server_port = config_helper.proxy_server_port
        self.debug = config_helper.debug
        self._prepare_session()

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
            raise CosClient.InvalidEndpointException(msg)

    def get(self, path, params=None, headers=None):
        return self.request("GET", path, params, headers)

    def put(self, path, params=None, headers=None, data=None):
        return self.request("PUT", path, params, headers, data)

    def post(self, path, params=None, headers=None, data=None):
        return self.request("POST", path, params, headers, data)

    def delete(self, path, params=None, headers=None):
        return self.request("DELETE", path, params, headers)

    def head(self, path, params=None, headers=None):
        return self.request("HEAD", path, params, headers)

    def request(self, method, path, params=None, headers=None, data=None):
        """
        Signs and sends the request. Returns the response for 2xx status codes, raises ServerError
        for any other status and TransportError when no response was received.
        """
        url = self.request_builder.build_url(path, params)
        signed_headers = self.request_builder.create_signed_headers(method, path, params, headers)
        try:
            result = self._run_request(method, url, signed_headers, data)
        except requests.Timeout as e:
            self._log_request_failure(method, url, e)
            raise TransportError("Request timed out: " + str(e), ErrorKind.TIMEOUT)
        except requests.ConnectionError as e:
            self._log_request_failure(method, url, e)
            raise TransportError("Connection failed: " + str(e), ErrorKind.CONNECTION)
        except requests.RequestException as e:
            self._log_request_failure(method, url, e)
            raise TransportError("Request failed: " + str(e), ErrorKind.CONNECTION)
        if not result.ok:
            raise self._build_server_error(method, url, result)
        return result

    def _build_server_error(self, method, url, result):
        code, message = parse_error(result.content)
        if not message:
            message = result.text or result.reason or "Unknown error"
        self._LOGGER.warning("Request " + method + " '" + url + "' failed with status " + str(result.status_code)
                             + (" (" + code + ")" if code else ""))
        return ServerError(result.status_code, code or '', message)

    def _log_request_failure(self, method, url, exception):
        self._LOGGER.warning("Could not send " + method + " request using the following endpoint: '" + self.endpoint
                             + "'. [Exception: " + str(exception) + "]")
        self._LOGGER.warning("Request details: '" + url + "'")

    def _run_request(self, method, url, headers, data=None):
        """
        Executes the HTTP request with timeout.
        """
        if self.debug:
            self._write_trace(method, url, headers)
        return self.session.request(method, url, headers=headers, data=data, timeout=self.timeout)

    def _write_trace(self, method, url, headers):
        """ Appends a curl command reproducing the request, credentials headers are left out """
        file_path = os.path.join(gettempdir(), self._TRACE_FILE_NAME)
        if os.path.isfile(file_path) and os.path.getsize(file_path) > self._LOG_FILE_MAX_SIZE:
            os.remove(file_path)
        header_options = "".join(" -H \"" + key + ": " + str(value) + "\"" for key, value in sorted(headers.items())
                                 if key not in self._UNTRACED_HEADERS)
        with open(file_path, "a") as logfile:
            logfile.write("curl -i -v -X " + method + " --connect-timeout " + str(self.timeout[0]) + " -m "
                          + str(self.timeout[1]) + header_options + " '" + url + "'")
            logfile.write("\n\n")

    class InvalidEndpointException(ConfigError):
        pass
