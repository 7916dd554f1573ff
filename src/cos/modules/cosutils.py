import calendar
import mimetypes
import os
import re
import time
from datetime import datetime

_SIGN_TIME_LEEWAY = 5 * 60
_SIGN_TIME_DURATION = 60 * 60
_APP_ID_PATTERN = re.compile(r"^(?P<name>.+)-(?P<app_id>[0-9]+)$")
DEFAULT_CONTENT_TYPE = "application/octet-stream"

# extensions missing from, or mapped differently by, the platform mime table
_EXTRA_CONTENT_TYPES = {
    ".md": "text/markdown",
    ".csv": "text/csv",
    ".webp": "image/webp",
    ".heic": "image/heic",
    ".heif": "image/heif",
    ".avif": "image/avif",
    ".jxl": "image/jxl",
    ".ico": "image/x-icon",
    ".flv": "video/x-flv",
    ".mkv": "video/x-matroska",
    ".m4v": "video/x-m4v",
    ".3gp": "video/3gpp",
    ".3g2": "video/3gpp2",
    ".ts": "video/mp2t",
    ".mts": "video/mp2t",
    ".m2ts": "video/mp2t",
    ".ogv": "video/ogg",
    ".wav": "audio/wav",
    ".flac": "audio/flac",
    ".aac": "audio/aac",
    ".ogg": "audio/ogg",
    ".wma": "audio/x-ms-wma",
    ".m4a": "audio/mp4",
    ".opus": "audio/opus",
    ".rar": "application/vnd.rar",
    ".7z": "application/x-7z-compressed",
    ".gz": "application/gzip",
    ".bz2": "application/x-bzip2",
    ".exe": "application/octet-stream",
    ".dmg": "application/x-apple-diskimage",
    ".iso": "application/x-iso9660-image",
    ".js": "application/javascript",
    ".xml": "application/xml",
}


def get_timestamp():
    """ Returns the current Unix time in whole seconds """
    return int(time.time())


def to_unix_seconds(value):
    """ Converts datetime objects (naive values are treated as UTC) and numbers to whole Unix seconds """
    if isinstance(value, datetime):
        return calendar.timegm(value.utctimetuple())
    return int(value)


def get_sign_time_window(now=None, leeway=_SIGN_TIME_LEEWAY, duration=_SIGN_TIME_DURATION):
    """
    Returns the (start, end) signing time window bracketing the request time,
    starting a few minutes in the past to tolerate clock skew.
    """
    if now is None:
        now = get_timestamp()
    return now - leeway, now + duration


def split_bucket(bucket):
    """
    Splits a bucket identifier in format {name}-{appid} into (name, appid).
    The app id is None when the bucket has no numeric suffix.
    """
    match = _APP_ID_PATTERN.match(bucket or "")
    if match:
        return match.group("name"), match.group("app_id")
    return bucket, None


def extract_app_id(bucket):
    return split_bucket(bucket)[1]


def guess_content_type(file_path, default=DEFAULT_CONTENT_TYPE):
    """ Infers the MIME type from the file extension """
    extension = os.path.splitext(str(file_path))[1].lower()
    if extension in _EXTRA_CONTENT_TYPES:
        return _EXTRA_CONTENT_TYPES[extension]
    content_type, _ = mimetypes.guess_type("file" + extension, strict=False)
    return content_type or default
