from ..coscredentials import COSCredentials
from ..logger.logger import get_logger
from .readerutils import ReaderUtils


class CredentialsReader(object):
    """
    The credentials file reader class that is responsible for reading and parsing the file containing the secret keys.

    The credentials file is a simple text file in format:
    secret_id = value
    secret_key = value2

    Keyword arguments:
    creds_path -- the path for the credentials file to be parsed (Required)
    """

    _LOGGER = get_logger(__name__)
    _SECRET_ID_CONFIG_KEY = "secret_id"
    _SECRET_KEY_CONFIG_KEY = "secret_key"

    def __init__(self, creds_path):
        self.creds_path = creds_path
        self.credentials = None
        try:
            self.reader_utils = ReaderUtils(creds_path)
        except IOError:
            self._LOGGER.warning("Cannot read credentials file at: " + str(creds_path) + ". Falling back to environment variables.")
            return
        try:
            self._parse_credentials_file()
        except ValueError as e:
            raise CredentialsReaderException(e)

    def _parse_credentials_file(self):
        secret_id = self.reader_utils.get_string(self._SECRET_ID_CONFIG_KEY)
        secret_key = self.reader_utils.get_string(self._SECRET_KEY_CONFIG_KEY)
        if not secret_id or not secret_key:
            raise CredentialsReaderException("Secret id or secret key is missing in the credentials file.")
        self.credentials = COSCredentials(secret_id, secret_key)


class CredentialsReaderException(Exception):
    pass
