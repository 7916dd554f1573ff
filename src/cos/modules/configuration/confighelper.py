import os

from ..coscredentials import COSCredentials
from ..cosutils import extract_app_id
from ..errors import ConfigError
from ..logger.logger import get_logger
from .configreader import ConfigReader
from .credentialsreader import CredentialsReader


class ConfigHelper(object):
    """
    The configuration helper is responsible for obtaining configuration data from number
    of sources based on predefined configuration precedence.

    The configuration precedence from highest to lowest:
    1. Constructor arguments
    2. Client Config File (and the credentials file it points to)
    3. Environment Variables

    Keyword arguments:
    config_path -- The path to the client configuration file (Default None, no file is read)
    credentials -- The COSCredentials object, e.g. temporary credentials (Default None)
    secret_id, secret_key, region, bucket, domain, use_https, timeout, debug,
    proxy_server_name, proxy_server_port -- explicit values overriding every other source
    environ -- The mapping used to look up environment variables (Default os.environ)
    """

    _LOGGER = get_logger(__name__)
    _DEFAULT_TIMEOUT = 30
    _DEFAULT_CONNECTION_TIMEOUT = 5
    ENV_SECRET_ID = "COS_SECRET_ID"
    ENV_SECRET_KEY = "COS_SECRET_KEY"
    ENV_REGION = "COS_REGION"
    ENV_BUCKET = "COS_BUCKET"

    def __init__(self, config_path=None, credentials=None, secret_id=None, secret_key=None, region=None,
                 bucket=None, domain=None, use_https=None, timeout=None, debug=None,
                 proxy_server_name=None, proxy_server_port=None, environ=None):
        self._config_path = config_path
        self._environ = os.environ if environ is None else environ
        self._credentials = None
        self.region = ''
        self.bucket = ''
        self.domain = ''
        self.use_https = True
        self.timeout = self._DEFAULT_TIMEOUT
        self.connection_timeout = self._DEFAULT_CONNECTION_TIMEOUT
        self.debug = False
        self.proxy_server_name = None
        self.proxy_server_port = None
        self.config_reader = None
        self._load_configuration()
        self._apply_overrides(credentials, secret_id, secret_key, region, bucket, domain, use_https, timeout,
                              debug, proxy_server_name, proxy_server_port)
        self._check_configuration_integrity()

    @property
    def credentials(self):
        return self._credentials

    @credentials.setter
    def credentials(self, credentials):
        self._credentials = credentials

    @property
    def app_id(self):
        return extract_app_id(self.bucket)

    @property
    def scheme(self):
        return "https" if self.use_https else "http"

    @property
    def bucket_host(self):
        if self.domain:
            return self.domain
        return self.bucket + ".cos." + self.region + ".myqcloud.com"

    @property
    def service_host(self):
        return "cos." + self.region + ".myqcloud.com"

    @property
    def bucket_url(self):
        """ The base URL of bucket and object operations """
        return self.scheme + "://" + self.bucket_host

    @property
    def service_url(self):
        """ The base URL of service operations, e.g. listing buckets """
        return self.scheme + "://" + self.service_host

    def _load_configuration(self):
        """ Try and load configuration based on the predefined precedence """
        self._load_from_environment()
        if self._config_path:
            self.config_reader = ConfigReader(self._config_path)
            self._load_from_config_file()

    def _load_from_environment(self):
        secret_id = self._environ.get(self.ENV_SECRET_ID, '')
        secret_key = self._environ.get(self.ENV_SECRET_KEY, '')
        if secret_id or secret_key:
            self._credentials = COSCredentials(secret_id, secret_key)
        self.region = self._environ.get(self.ENV_REGION, '')
        self.bucket = self._environ.get(self.ENV_BUCKET, '')

    def _load_from_config_file(self):
        reader = self.config_reader
        if reader.credentials_path:
            credentials = CredentialsReader(reader.credentials_path).credentials
            if credentials:
                self._credentials = credentials
        if reader.region:
            self.region = reader.region
        if reader.bucket:
            self.bucket = reader.bucket
        if reader.domain:
            self.domain = reader.domain
        if reader.timeout:
            self.timeout = reader.timeout
        if reader.proxy_server_name:
            self.proxy_server_name = reader.proxy_server_name
        if reader.proxy_server_port:
            self.proxy_server_port = reader.proxy_server_port
        self.use_https = reader.use_https
        self.debug = reader.debug

    def _apply_overrides(self, credentials, secret_id, secret_key, region, bucket, domain, use_https, timeout,
                         debug, proxy_server_name, proxy_server_port):
        if credentials is not None:
            self._credentials = credentials
        elif secret_id is not None or secret_key is not None:
            current = self._credentials or COSCredentials()
            self._credentials = COSCredentials(secret_id if secret_id is not None else current.secret_id,
                                               secret_key if secret_key is not None else current.secret_key)
        overrides = {
            "region": region,
            "bucket": bucket,
            "domain": domain,
            "use_https": use_https,
            "timeout": timeout,
            "debug": debug,
            "proxy_server_name": proxy_server_name,
            "proxy_server_port": proxy_server_port,
        }
        for name, value in overrides.items():
            if value is not None:
                setattr(self, name, value)

    def _check_configuration_integrity(self):
        """ Check the state of this configuration helper object to ensure that all required values are loaded """
        if not self._credentials:
            self._raise_config_error("COS credentials are missing.")
        if not self._credentials.secret_id:
            self._raise_config_error("SecretId cannot be empty.")
        if not self._credentials.secret_key:
            self._raise_config_error("SecretKey cannot be empty.")
        if not self.region:
            self._raise_config_error("Region cannot be empty.")
        if not self.bucket:
            self._raise_config_error("Bucket cannot be empty.")

    def _raise_config_error(self, msg):
        self._LOGGER.error(msg)
        raise ConfigError(msg)
