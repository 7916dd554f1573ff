from urllib.parse import quote, quote_plus, unquote_to_bytes

from ..errors import MalformedUriError
from ..logger.logger import get_logger


class CanonicalRequestBuilder(object):
    """
    The canonical request builder serializes an HTTP method, path, query parameters and headers
    into the HttpString which the object storage service reconstructs to verify a request signature.

    The HttpString has four lines, each terminated with a new line character:
    lowercased-method
    encoded-path
    sorted-encoded-params
    sorted-encoded-headers
    """
    _LOGGER = get_logger(__name__)
    # path segment characters kept as is, requests leaves all of them untouched when it prepares the URL
    _PATH_SAFE_CHARACTERS = "!$&'()*+,;=:@[]"
    _SEGMENT_SEPARATOR = "/"
    # form encoding keeps alphanumerics and '*-._' only, '~' is not part of that set
    _FORM_SAFE_CHARACTERS = "*"
    _ENTRY_SEPARATOR = "&"
    _KEY_SEPARATOR = ";"

    def build_http_string(self, method, path, params, headers):
        """ Creates the HttpString for the request, the trailing new line is significant """
        return self._normalize_method(method) + "\n" + self.encode_uri_path(path) + "\n" \
            + self.build_params_string(params) + "\n" + self.build_headers_string(headers) + "\n"

    def build_params_string(self, params):
        return self._build_sorted_string(params)

    def build_headers_string(self, headers):
        return self._build_sorted_string(headers)

    def build_key_list(self, mapping):
        """ Returns a semicolon delimited list of lowercased keys in ascending order """
        return self._KEY_SEPARATOR.join(key for key, _ in self._sorted_entries(mapping))

    def encode_uri_path(self, path):
        """
        Encodes the path component of the request URL. Every segment is percent-decoded first and
        then encoded again, so an already encoded path is never encoded twice and a stray '%' becomes '%25'.
        An encoded '/' stays inside its segment.
        """
        self._validate_path(path)
        if not path:
            return "/"
        segments = path.replace("\\", self._SEGMENT_SEPARATOR).split(self._SEGMENT_SEPARATOR)
        encoded_path = self._SEGMENT_SEPARATOR.join(
            quote(unquote_to_bytes(segment), safe=self._PATH_SAFE_CHARACTERS) for segment in segments)
        return self._remove_dot_segments(encoded_path)

    def _validate_path(self, path):
        if not isinstance(path, str):
            self._raise_malformed("Request path must be a string, got " + type(path).__name__)
        if not path:
            return
        if not path.startswith("/"):
            self._raise_malformed("Request path '" + path + "' must start with '/'")
        if path.startswith("//"):
            self._raise_malformed("Request path '" + path + "' cannot start with an authority")
        for character in path:
            if character in "?#":
                self._raise_malformed("Request path '" + path + "' cannot contain query or fragment delimiters")
            if ord(character) < 0x20 or ord(character) == 0x7f:
                self._raise_malformed("Request path " + repr(path) + " contains control characters")

    def _raise_malformed(self, msg):
        self._LOGGER.warning(msg)
        raise MalformedUriError(msg)

    @staticmethod
    def _remove_dot_segments(path):
        segments = path.split("/")[1:]
        output = []
        for index, segment in enumerate(segments):
            is_last = index == len(segments) - 1
            if segment == ".":
                if is_last:
                    output.append("")
            elif segment == "..":
                if output:
                    output.pop()
                if is_last:
                    output.append("")
            else:
                output.append(segment)
        return "/" + "/".join(output)

    def _build_sorted_string(self, mapping):
        return self._ENTRY_SEPARATOR.join(key + "=" + form_encode(value) for key, value in self._sorted_entries(mapping))

    @staticmethod
    def _sorted_entries(mapping):
        """
        Lowercases the keys and sorts the entries by them. The sort is stable, so keys which differ
        only in case keep their input order.
        """
        entries = [(str(key).lower(), value) for key, value in (mapping or {}).items()]
        return sorted(entries, key=lambda entry: entry[0])

    @staticmethod
    def _normalize_method(method):
        return str(method).lower()


def form_encode(value):
    """
    Encodes a value the way application/x-www-form-urlencoded serializers do:
    alphanumerics and '*-._' are kept, space becomes '+' and everything else is percent-encoded.
    """
    if value is None:
        value = ""
    return quote_plus(str(value), safe=CanonicalRequestBuilder._FORM_SAFE_CHARACTERS).replace("~", "%7E")
