from enum import Enum


class ErrorKind(Enum):
    """ Structured classification of client failures, checked by value """
    MALFORMED_URI = "malformed_uri"
    AUTH = "auth"
    CONFIG = "config"
    SERVER = "server"
    CLIENT = "client"
    TIMEOUT = "timeout"
    CONNECTION = "connection"
    RESPONSE_PARSE = "response_parse"
    IO = "io"


class CosError(Exception):
    """
    The base class for all errors raised by the client.

    Keyword arguments:
    message -- the human readable description of the failure
    kind -- the ErrorKind classifying the failure
    """
    KIND = ErrorKind.CLIENT

    def __init__(self, message, kind=None):
        super(CosError, self).__init__(message)
        self.message = message
        self.kind = kind or self.KIND


class MalformedUriError(CosError):
    """ The request path cannot be canonicalized """
    KIND = ErrorKind.MALFORMED_URI


class AuthError(CosError):
    """ The HMAC key material was rejected while signing """
    KIND = ErrorKind.AUTH


class ConfigError(CosError):
    KIND = ErrorKind.CONFIG


class ServerError(CosError):
    """
    The service answered with an error status or an error document.

    Keyword arguments:
    status -- the HTTP status code (None for API level errors returned with 200)
    code -- the service error code, e.g. NoSuchKey (default '')
    message -- the service error message
    """
    KIND = ErrorKind.SERVER

    def __init__(self, status, code, message):
        super(ServerError, self).__init__(self._format(status, code, message))
        self.status = status
        self.code = code
        self.server_message = message

    @staticmethod
    def _format(status, code, message):
        details = [str(part) for part in (status, code) if part]
        return "Server error: " + " - ".join(details + [message])


class TransportError(CosError):
    """ The request did not produce an HTTP response (kind is TIMEOUT or CONNECTION) """
    KIND = ErrorKind.CONNECTION


class ResponseParseError(CosError):
    KIND = ErrorKind.RESPONSE_PARSE


class LocalFileError(CosError):
    KIND = ErrorKind.IO


_ADVICE = {
    ErrorKind.MALFORMED_URI: "Check the object key, it must form a valid URL path.",
    ErrorKind.AUTH: "Check that the secret key is set and valid.",
    ErrorKind.CONFIG: "Check the secret id, secret key, region and bucket configuration.",
    ErrorKind.TIMEOUT: "The request timed out, the file may be too large. Increase the timeout or check the network.",
    ErrorKind.CONNECTION: "Check the network connection and the endpoint or proxy settings.",
    ErrorKind.RESPONSE_PARSE: "The service returned an unexpected response, check the endpoint.",
    ErrorKind.IO: "Check that the local file exists and is accessible.",
    ErrorKind.CLIENT: "Check the request parameters.",
}

_SERVER_ADVICE = {
    401: "Check the access permissions of the credentials and the bucket configuration.",
    403: "Check the access permissions of the credentials and the bucket configuration.",
    404: "Check that the bucket and object exist in the configured region.",
}

_DEFAULT_SERVER_ADVICE = "The service rejected the request, check the error code for details."


def advice_for(error):
    """
    Returns a user facing hint for the error, selected by its kind and, for server errors, by its HTTP status.
    Returns None for errors that are not CosError instances.
    """
    kind = getattr(error, "kind", None)
    if not isinstance(kind, ErrorKind):
        return None
    if kind is ErrorKind.SERVER:
        return _SERVER_ADVICE.get(getattr(error, "status", None), _DEFAULT_SERVER_ADVICE)
    return _ADVICE.get(kind)
