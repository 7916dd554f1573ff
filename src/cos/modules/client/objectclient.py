import base64
import hashlib

from ..cosdata import DeleteObjectResult, GetObjectResult, HeadObjectResult, PutObjectResult
from ..cosutils import DEFAULT_CONTENT_TYPE, guess_content_type
from ..errors import LocalFileError, MalformedUriError, ServerError
from ..logger.logger import get_logger
from .canonicalrequestbuilder import CanonicalRequestBuilder
from .responseparser import build_delete_request, parse_delete_result


class ObjectClient(object):
    """
    The object client uploads, downloads and deletes objects of the configured bucket.

    Keyword arguments:
    cos_client -- the CosClient used to sign and send requests
    """

    _LOGGER = get_logger(__name__)
    _CONTENT_TYPE_HEADER = "Content-Type"
    _CONTENT_MD5_HEADER = "Content-MD5"
    _VERSION_ID_HEADER = "x-cos-version-id"
    _DELETE_MARKER_HEADER = "x-cos-delete-marker"
    _BUCKET_PATH = "/"
    _PATH_ENCODER = CanonicalRequestBuilder()

    def __init__(self, cos_client):
        self.client = cos_client

    def put_object(self, key, data, content_type=None):
        headers = {}
        if content_type:
            headers[self._CONTENT_TYPE_HEADER] = content_type
        response = self.client.put(self._get_object_path(key), headers=headers, data=data)
        return PutObjectResult(response.headers.get("ETag", ''), response.headers.get(self._VERSION_ID_HEADER))

    def put_object_from_file(self, key, file_path, content_type=None):
        """ Uploads the file, the content type is inferred from the file extension unless given """
        try:
            with open(file_path, "rb") as upload_file:
                data = upload_file.read()
        except (IOError, OSError) as e:
            raise LocalFileError("Failed to read file '" + str(file_path) + "': " + str(e))
        return self.put_object(key, data, content_type or guess_content_type(file_path))

    def get_object(self, key):
        response = self.client.get(self._get_object_path(key))
        return GetObjectResult(response.content, **self._get_metadata(response))

    def get_object_to_file(self, key, file_path):
        result = self.get_object(key)
        try:
            with open(file_path, "wb") as download_file:
                download_file.write(result.data)
        except (IOError, OSError) as e:
            raise LocalFileError("Failed to write file '" + str(file_path) + "': " + str(e))
        return result

    def delete_object(self, key):
        response = self.client.delete(self._get_object_path(key))
        delete_marker = response.headers.get(self._DELETE_MARKER_HEADER, '').lower() == "true"
        return DeleteObjectResult(response.headers.get(self._VERSION_ID_HEADER), delete_marker)

    def delete_objects(self, keys, quiet=False):
        body = build_delete_request(keys, quiet)
        headers = {
            self._CONTENT_TYPE_HEADER: "application/xml",
            self._CONTENT_MD5_HEADER: base64.b64encode(hashlib.md5(body).digest()).decode("ascii"),
        }
        response = self.client.post(self._BUCKET_PATH, {"delete": ""}, headers=headers, data=body)
        return parse_delete_result(response.content)

    def head_object(self, key):
        response = self.client.head(self._get_object_path(key))
        return HeadObjectResult(**self._get_metadata(response))

    def object_exists(self, key):
        try:
            self.head_object(key)
        except ServerError as e:
            self._LOGGER.debug("Object '" + key + "' is not accessible, status: " + str(e.status))
            return False
        return True

    def _get_object_path(self, key):
        """ Returns the object path, a key which resolves to the bucket itself is rejected """
        path = "/" + key.lstrip("/")
        if self._PATH_ENCODER.encode_uri_path(path) == self._BUCKET_PATH:
            msg = "Object key '" + key + "' does not name an object."
            self._LOGGER.warning(msg)
            raise MalformedUriError(msg)
        return path

    @staticmethod
    def _get_metadata(response):
        try:
            content_length = int(response.headers.get("Content-Length", 0))
        except ValueError:
            content_length = 0
        return {
            "content_length": content_length,
            "content_type": response.headers.get("Content-Type", DEFAULT_CONTENT_TYPE),
            "etag": response.headers.get("ETag", ''),
            "last_modified": response.headers.get("Last-Modified"),
        }
