from ..cosdata import BucketAcl
from ..errors import ServerError
from ..logger.logger import get_logger
from .responseparser import parse_acl, parse_list_objects, parse_location, parse_versioning


class BucketClient(object):
    """
    The bucket client performs bucket level operations on the configured bucket.
    ACL and versioning requests are passed through to the service as they are.

    Keyword arguments:
    cos_client -- the CosClient used to sign and send requests
    """

    _LOGGER = get_logger(__name__)
    _BUCKET_PATH = "/"
    _ACL_HEADER = "x-cos-acl"

    def __init__(self, cos_client):
        self.client = cos_client

    def create_bucket(self, acl=None):
        self.client.put(self._BUCKET_PATH, headers=self._get_acl_headers(acl))

    def delete_bucket(self):
        self.client.delete(self._BUCKET_PATH)

    def bucket_exists(self):
        try:
            self.client.head(self._BUCKET_PATH)
        except ServerError as e:
            self._LOGGER.debug("Bucket is not accessible, status: " + str(e.status))
            return False
        return True

    def get_bucket_location(self):
        return parse_location(self.client.get(self._BUCKET_PATH, {"location": ""}).content)

    def list_objects(self, prefix=None, delimiter=None, marker=None, max_keys=None):
        params = self._build_params({
            "prefix": prefix,
            "delimiter": delimiter,
            "marker": marker,
            "max-keys": max_keys,
        })
        return parse_list_objects(self.client.get(self._BUCKET_PATH, params).content)

    def list_objects_v2(self, prefix=None, delimiter=None, continuation_token=None, max_keys=None, start_after=None):
        params = self._build_params({
            "list-type": "2",
            "prefix": prefix,
            "delimiter": delimiter,
            "continuation-token": continuation_token,
            "max-keys": max_keys,
            "start-after": start_after,
        })
        return parse_list_objects(self.client.get(self._BUCKET_PATH, params).content)

    def get_bucket_acl(self):
        return parse_acl(self.client.get(self._BUCKET_PATH, {"acl": ""}).content)

    def put_bucket_acl(self, acl):
        self.client.put(self._BUCKET_PATH, {"acl": ""}, headers=self._get_acl_headers(acl))

    def get_bucket_versioning(self):
        """ Returns the versioning status, an empty string when versioning was never enabled """
        return parse_versioning(self.client.get(self._BUCKET_PATH, {"versioning": ""}).content)

    def _get_acl_headers(self, acl):
        if acl is None:
            return {}
        return {self._ACL_HEADER: str(BucketAcl(acl))}

    @staticmethod
    def _build_params(params):
        return dict((key, str(value)) for key, value in params.items() if value is not None)
