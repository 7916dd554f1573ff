from enum import Enum


class BucketAcl(Enum):
    PRIVATE = "private"
    PUBLIC_READ = "public-read"
    PUBLIC_READ_WRITE = "public-read-write"
    AUTHENTICATED_READ = "authenticated-read"

    def __str__(self):
        return self.value


class PutObjectResult(object):
    def __init__(self, etag='', version_id=None):
        self.etag = etag
        self.version_id = version_id


class HeadObjectResult(object):
    """
    The object metadata returned by HEAD and GET object requests.

    Keyword arguments:
    content_length -- the size of the object in bytes (default 0)
    content_type -- the MIME type of the object (default application/octet-stream)
    etag -- the entity tag of the object (default '')
    last_modified -- the last modification date as sent by the service (default None)
    """

    def __init__(self, content_length=0, content_type="application/octet-stream", etag='', last_modified=None):
        self.content_length = content_length
        self.content_type = content_type
        self.etag = etag
        self.last_modified = last_modified


class GetObjectResult(HeadObjectResult):
    def __init__(self, data=b'', **metadata):
        super(GetObjectResult, self).__init__(**metadata)
        self.data = data


class DeleteObjectResult(object):
    def __init__(self, version_id=None, delete_marker=False):
        self.version_id = version_id
        self.delete_marker = delete_marker


class DeletedObject(object):
    def __init__(self, key, version_id=None, delete_marker=None):
        self.key = key
        self.version_id = version_id
        self.delete_marker = delete_marker


class DeleteError(object):
    def __init__(self, key, code, message):
        self.key = key
        self.code = code
        self.message = message


class DeleteObjectsResult(object):
    def __init__(self, deleted=None, errors=None):
        self.deleted = deleted or []
        self.errors = errors or []


class ObjectInfo(object):
    def __init__(self, key, last_modified='', etag='', size=0, storage_class=''):
        self.key = key
        self.last_modified = last_modified
        self.etag = etag
        self.size = size
        self.storage_class = storage_class


class ListObjectsResult(object):
    """
    The result of both versions of the list objects request. Fields that a version does not
    return keep their defaults, e.g. marker for version 2 or continuation tokens for version 1.
    """

    def __init__(self, name='', prefix='', max_keys=0, is_truncated=False, contents=None, common_prefixes=None,
                 marker='', next_marker='', key_count=None, continuation_token='', next_continuation_token=''):
        self.name = name
        self.prefix = prefix
        self.max_keys = max_keys
        self.is_truncated = is_truncated
        self.contents = contents or []
        self.common_prefixes = common_prefixes or []
        self.marker = marker
        self.next_marker = next_marker
        self.key_count = key_count
        self.continuation_token = continuation_token
        self.next_continuation_token = next_continuation_token


class Grant(object):
    def __init__(self, grantee_type='', grantee_id='', display_name='', uri='', permission=''):
        self.grantee_type = grantee_type
        self.grantee_id = grantee_id
        self.display_name = display_name
        self.uri = uri
        self.permission = permission


class AccessControlPolicy(object):
    def __init__(self, owner_id='', owner_display_name='', grants=None):
        self.owner_id = owner_id
        self.owner_display_name = owner_display_name
        self.grants = grants or []
