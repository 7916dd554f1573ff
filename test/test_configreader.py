import os
import unittest

from mock import Mock

from cos.modules.configuration.configreader import ConfigReader


class ConfigReaderTest(unittest.TestCase):
    CONFIG_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "config_files") + os.sep
    VALID_CONFIG_FULL = CONFIG_DIR + "valid_config_full"
    VALID_CONFIG_WITH_REGION_ONLY = CONFIG_DIR + "valid_config_with_region_only"
    VALID_CONFIG_WITH_INVALID_BOOLEAN = CONFIG_DIR + "valid_config_with_invalid_boolean"
    INVALID_CONFIG_WITH_SYNTAX_ERROR = CONFIG_DIR + "invalid_config_with_syntax_error"
    INVALID_CONFIG_WITH_TIMEOUT = CONFIG_DIR + "invalid_config_with_timeout"
    MISSING_CONFIG = CONFIG_DIR + "no_config"

    def setUp(self):
        self.logger = Mock()
        ConfigReader._LOGGER = self.logger

    def test_read_full_config(self):
        reader = ConfigReader(self.VALID_CONFIG_FULL)
        self.assertEqual("./test/config_files/valid_credentials_file", reader.credentials_path)
        self.assertEqual("ap-beijing", reader.region)
        self.assertEqual("examplebucket-1250000000", reader.bucket)
        self.assertEqual("static.example.com", reader.domain)
        self.assertEqual(False, reader.use_https)
        self.assertEqual(60, reader.timeout)
        self.assertEqual(True, reader.debug)
        self.assertEqual("https://proxy.example.com", reader.proxy_server_name)
        self.assertEqual("8080", reader.proxy_server_port)

    def test_defaults_for_missing_keys(self):
        reader = ConfigReader(self.VALID_CONFIG_WITH_REGION_ONLY)
        self.assertEqual("ap-guangzhou", reader.region)
        self.assertEqual("", reader.credentials_path)
        self.assertEqual("", reader.bucket)
        self.assertEqual("", reader.domain)
        self.assertEqual(True, reader.use_https)
        self.assertEqual(None, reader.timeout)
        self.assertEqual(False, reader.debug)
        self.assertEqual("", reader.proxy_server_name)

    def test_invalid_booleans_fall_back_to_defaults(self):
        reader = ConfigReader(self.VALID_CONFIG_WITH_INVALID_BOOLEAN)
        self.assertEqual(False, reader.debug)
        self.assertEqual(True, reader.use_https)

    def test_invalid_syntax_is_logged_and_raised(self):
        self.assertRaises(ValueError, ConfigReader, self.INVALID_CONFIG_WITH_SYNTAX_ERROR)
        self.assertTrue(self.logger.warning.called)

    def test_invalid_timeout_is_logged_and_raised(self):
        self.assertRaises(ValueError, ConfigReader, self.INVALID_CONFIG_WITH_TIMEOUT)
        self.assertTrue(self.logger.warning.called)

    def test_missing_config_file_is_logged_and_raised(self):
        self.assertRaises(IOError, ConfigReader, self.MISSING_CONFIG)
        self.assertTrue(self.logger.warning.called)
