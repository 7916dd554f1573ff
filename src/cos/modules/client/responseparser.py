import xml.etree.ElementTree as ET

from ..cosdata import AccessControlPolicy, DeletedObject, DeleteError, DeleteObjectsResult, Grant, ListObjectsResult, \
    ObjectInfo
from ..errors import ResponseParseError


def parse_error(content):
    """ Returns (code, message) from a service error document, or (None, None) if the content is not one """
    try:
        root = _parse(content)
    except ResponseParseError:
        return None, None
    if _local_name(root.tag) != "Error":
        return None, None
    return _text(root, "Code") or None, _text(root, "Message") or None


def parse_location(content):
    root = _parse(content)
    return (root.text or "").strip()


def parse_versioning(content):
    return _text(_parse(content), "Status")


def parse_list_objects(content):
    root = _parse(content)
    key_count = _text(root, "KeyCount")
    return ListObjectsResult(
        name=_text(root, "Name"),
        prefix=_text(root, "Prefix"),
        max_keys=_int(_text(root, "MaxKeys")),
        is_truncated=_bool(_text(root, "IsTruncated")),
        contents=[_parse_object_info(element) for element in _children(root, "Contents")],
        common_prefixes=[_text(element, "Prefix") for element in _children(root, "CommonPrefixes")],
        marker=_text(root, "Marker"),
        next_marker=_text(root, "NextMarker"),
        key_count=_int(key_count) if key_count else None,
        continuation_token=_text(root, "ContinuationToken"),
        next_continuation_token=_text(root, "NextContinuationToken"))


def parse_acl(content):
    root = _parse(content)
    owner = _child(root, "Owner")
    grants = []
    access_control_list = _child(root, "AccessControlList")
    if access_control_list is not None:
        grants = [_parse_grant(element) for element in _children(access_control_list, "Grant")]
    return AccessControlPolicy(owner_id=_text(owner, "ID"), owner_display_name=_text(owner, "DisplayName"),
                               grants=grants)


def parse_delete_result(content):
    root = _parse(content)
    deleted = []
    for element in _children(root, "Deleted"):
        delete_marker = _text(element, "DeleteMarker")
        deleted.append(DeletedObject(_text(element, "Key"), _text(element, "VersionId") or None,
                                     _bool(delete_marker) if delete_marker else None))
    errors = [DeleteError(_text(element, "Key"), _text(element, "Code"), _text(element, "Message"))
              for element in _children(root, "Error")]
    return DeleteObjectsResult(deleted, errors)


def build_delete_request(keys, quiet=False):
    root = ET.Element("Delete")
    ET.SubElement(root, "Quiet").text = "true" if quiet else "false"
    for key in keys:
        entry = ET.SubElement(root, "Object")
        ET.SubElement(entry, "Key").text = key
    return ET.tostring(root, encoding="utf-8")


def _parse_object_info(element):
    return ObjectInfo(key=_text(element, "Key"), last_modified=_text(element, "LastModified"),
                      etag=_text(element, "ETag"), size=_int(_text(element, "Size")),
                      storage_class=_text(element, "StorageClass"))


def _parse_grant(element):
    grantee = _child(element, "Grantee")
    grantee_type = ''
    if grantee is not None:
        for name, value in grantee.attrib.items():
            if _local_name(name) == "type":
                grantee_type = value
    return Grant(grantee_type=grantee_type, grantee_id=_text(grantee, "ID"),
                 display_name=_text(grantee, "DisplayName"), uri=_text(grantee, "URI"),
                 permission=_text(element, "Permission"))


def _parse(content):
    if not content:
        raise ResponseParseError("Empty response body.")
    try:
        return ET.fromstring(content)
    except ET.ParseError as e:
        raise ResponseParseError("Cannot parse XML response: " + str(e))


def _local_name(tag):
    return tag.rsplit("}", 1)[-1]


def _children(element, name):
    if element is None:
        return []
    return [child for child in element if _local_name(child.tag) == name]


def _child(element, name):
    children = _children(element, name)
    return children[0] if children else None


def _text(element, name):
    child = _child(element, name)
    if child is None or child.text is None:
        return ''
    return child.text.strip()


def _int(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _bool(value):
    return value.lower() == "true"
