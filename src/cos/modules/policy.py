import json

from .cosutils import split_bucket

POLICY_VERSION = "2.0"
ALLOW = "allow"
DENY = "deny"
_WILDCARD_APP_ID = "*"
_RESOURCE_FORMAT = "qcs::cos:*:uid/{app_id}:prefix//{app_id}/{bucket_name}/{prefix}*"

PUT_OBJECT_ACTIONS = [
    "name/cos:PutObject",
    "name/cos:PostObject",
]
MULTIPART_UPLOAD_ACTIONS = [
    "name/cos:InitiateMultipartUpload",
    "name/cos:ListMultipartUploads",
    "name/cos:ListParts",
    "name/cos:UploadPart",
    "name/cos:CompleteMultipartUpload",
]
UPLOAD_ACTIONS = PUT_OBJECT_ACTIONS + MULTIPART_UPLOAD_ACTIONS
DOWNLOAD_ACTIONS = [
    "name/cos:GetObject",
    "name/cos:HeadObject",
]
DELETE_ACTIONS = [
    "name/cos:DeleteObject",
]
READ_WRITE_ACTIONS = PUT_OBJECT_ACTIONS + DOWNLOAD_ACTIONS + DELETE_ACTIONS + MULTIPART_UPLOAD_ACTIONS


def build_resource(bucket, prefix=None):
    """
    Creates the resource name of objects under the prefix of the bucket. The bucket identifier
    is split on its last '-' into the bucket name and the numeric app id, the app id is a
    wildcard when the bucket has no numeric suffix.
    """
    bucket_name, app_id = split_bucket(bucket)
    return _RESOURCE_FORMAT.format(app_id=app_id or _WILDCARD_APP_ID, bucket_name=bucket_name, prefix=prefix or "")


class Statement(object):
    """
    A single permission statement of a Policy.

    Keyword arguments:
    effect -- either 'allow' or 'deny'
    actions -- the ordered list of action identifiers, e.g. name/cos:GetObject
    resources -- the ordered list of resource names
    condition -- the optional nested map in format {operator: {key: value}} (default None)
    """

    def __init__(self, effect, actions, resources, condition=None):
        if effect not in (ALLOW, DENY):
            raise ValueError("Statement effect must be '" + ALLOW + "' or '" + DENY + "', got '" + str(effect) + "'.")
        self.effect = effect
        self.actions = list(actions)
        self.resources = list(resources)
        self.condition = condition

    def to_dict(self):
        statement = {
            "effect": self.effect,
            "action": list(self.actions),
            "resource": list(self.resources),
        }
        if self.condition is not None:
            statement["condition"] = self.condition
        return statement


class Policy(object):
    """
    The versioned permission policy attached to temporary credential requests.
    It is sent to the STS endpoint as an opaque JSON document.
    """

    def __init__(self, version=POLICY_VERSION, statements=None):
        self.version = version
        self.statements = list(statements or [])

    def add_statement(self, statement):
        self.statements.append(statement)
        return self

    def to_dict(self):
        return {
            "version": self.version,
            "statement": [statement.to_dict() for statement in self.statements],
        }

    def to_json(self):
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @classmethod
    def allow_put_object(cls, bucket, prefix=None):
        """ Allows simple, form and multipart uploads of objects under the prefix """
        return cls._allow(UPLOAD_ACTIONS, bucket, prefix)

    @classmethod
    def allow_get_object(cls, bucket, prefix=None):
        return cls._allow(DOWNLOAD_ACTIONS, bucket, prefix)

    @classmethod
    def allow_delete_object(cls, bucket, prefix=None):
        return cls._allow(DELETE_ACTIONS, bucket, prefix)

    @classmethod
    def allow_read_write(cls, bucket, prefix=None):
        """ Allows upload, download and delete of objects under the prefix """
        return cls._allow(READ_WRITE_ACTIONS, bucket, prefix)

    @classmethod
    def _allow(cls, actions, bucket, prefix):
        return cls().add_statement(Statement(ALLOW, actions, [build_resource(bucket, prefix)]))
