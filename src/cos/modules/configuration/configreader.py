from ..logger.logger import get_logger
from .readerutils import ReaderUtils


class ConfigReader(object):
    """
    The configuration reader class that is responsible for reading and parsing the client configuration file.

    The client configuration file is a simple text file in format:
    key = value
    key2 = value2

    Accepted configuration parameters:
    credentials_path -- the path to the file with the secret id and secret key
    region -- the region of the bucket, e.g. ap-beijing
    bucket -- the bucket identifier in format {name}-{appid}
    domain -- the custom domain used instead of the default bucket host
    use_https -- whether requests are sent over HTTPS (default true)
    timeout -- the response timeout in seconds
    debug -- the mode in which the client writes a trace of every request
    proxy_server_name -- the proxy server used for HTTPS requests
    proxy_server_port -- the port of the proxy server

    Keyword arguments:
    config_path -- the path for the configuration file to be parsed (Required)
    """

    _LOGGER = get_logger(__name__)
    _DEBUG_DEFAULT_VALUE = False
    _USE_HTTPS_DEFAULT_VALUE = True
    CREDENTIALS_PATH_KEY = "credentials_path"
    REGION_CONFIG_KEY = "region"
    BUCKET_CONFIG_KEY = "bucket"
    DOMAIN_CONFIG_KEY = "domain"
    USE_HTTPS_CONFIG_KEY = "use_https"
    TIMEOUT_CONFIG_KEY = "timeout"
    DEBUG_CONFIG_KEY = "debug"
    PROXY_SERVER_NAME_KEY = "proxy_server_name"
    PROXY_SERVER_PORT_KEY = "proxy_server_port"

    def __init__(self, config_path):
        self.config_path = config_path
        self.credentials_path = ''
        self.region = ''
        self.bucket = ''
        self.domain = ''
        self.use_https = self._USE_HTTPS_DEFAULT_VALUE
        self.timeout = None
        self.debug = self._DEBUG_DEFAULT_VALUE
        self.proxy_server_name = ''
        self.proxy_server_port = ''
        try:
            self.reader_utils = ReaderUtils(config_path)
            self._parse_config_file()
        except Exception as e:
            self._LOGGER.warning("Cannot read client configuration file at: " + config_path + ". Cause: " + str(e))
            raise e

    def _parse_config_file(self):
        """
        This method retrieves values from the configuration file in format key=value
        """
        self.credentials_path = self.reader_utils.get_string(self.CREDENTIALS_PATH_KEY)
        self.region = self.reader_utils.get_string(self.REGION_CONFIG_KEY)
        self.bucket = self.reader_utils.get_string(self.BUCKET_CONFIG_KEY)
        self.domain = self.reader_utils.get_string(self.DOMAIN_CONFIG_KEY)
        self.use_https = self.reader_utils.try_get_boolean(self.USE_HTTPS_CONFIG_KEY, self._USE_HTTPS_DEFAULT_VALUE)
        self.timeout = self.reader_utils.get_int(self.TIMEOUT_CONFIG_KEY)
        self.debug = self.reader_utils.try_get_boolean(self.DEBUG_CONFIG_KEY, self._DEBUG_DEFAULT_VALUE)
        self.proxy_server_name = self.reader_utils.get_string(self.PROXY_SERVER_NAME_KEY)
        self.proxy_server_port = self.reader_utils.get_string(self.PROXY_SERVER_PORT_KEY)
