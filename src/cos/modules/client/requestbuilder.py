from ..clientinfo import CLIENT_NAME, CLIENT_VERSION
from ..cosutils import get_sign_time_window
from .canonicalrequestbuilder import CanonicalRequestBuilder
from .querystringbuilder import QuerystringBuilder
from .signer import Signer


class RequestBuilder(object):
    """
    The request builder is responsible for building signed bucket and object requests.

    Paths starting with '/' address the bucket host, any other path addresses the service host.

    Keyword arguments:
    config_helper -- the ConfigHelper object providing credentials and endpoints
    """
    AUTHORIZATION_HEADER = "Authorization"
    HOST_HEADER = "Host"
    USER_AGENT_HEADER = "User-Agent"
    SECURITY_TOKEN_HEADER = "x-cos-security-token"

    def __init__(self, config_helper):
        self.config = config_helper
        self.canonical_request_builder = CanonicalRequestBuilder()
        self.querystring_builder = QuerystringBuilder()

    def create_signed_headers(self, method, path, params=None, headers=None, sign_time_window=None):
        """
        Creates the complete header set of the request including the Authorization header.
        Every header returned, except Authorization itself, is covered by the signature.
        """
        credentials = self.config.credentials
        request_headers = {
            self.HOST_HEADER: self._get_host(path),
            self.USER_AGENT_HEADER: self._get_user_agent_header(),
        }
        request_headers.update(headers or {})
        if credentials.token:
            request_headers[self.SECURITY_TOKEN_HEADER] = credentials.token
        start_time, end_time = sign_time_window or get_sign_time_window()
        signer = Signer(credentials, self.canonical_request_builder)
        request_headers[self.AUTHORIZATION_HEADER] = signer.sign(method, path, request_headers, params or {},
                                                                 start_time, end_time)
        return request_headers

    def build_url(self, path, params=None):
        """
        Creates the request URL. The path is encoded exactly as it is in the signed HttpString
        and requests sends it without quoting it again.
        """
        encoded_path = self.canonical_request_builder.encode_uri_path(path) if path else ""
        return self.querystring_builder.build_url(self._get_base_url(path), encoded_path, params)

    def _get_base_url(self, path):
        if path.startswith("/"):
            return self.config.bucket_url
        return self.config.service_url

    def _get_host(self, path):
        """ Returns the endpoint's hostname derived from the path """
        if path.startswith("/"):
            return self.config.bucket_host
        return self.config.service_host

    def _get_user_agent_header(self):
        return CLIENT_NAME + "/" + str(CLIENT_VERSION)
