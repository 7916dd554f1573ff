import logging
import unittest

from mock import Mock

from cos.modules.logger.logger import get_logger, _Logger, _StandardLogger


class LoggerTest(unittest.TestCase):

    def setUp(self):
        self.logger = get_logger(__name__)
        self.logger.logger = Mock()
        self.expected_prefix = "[COSClient][" + __name__ + "] "

    def test_type_of_logger(self):
        self.assertTrue(type(self.logger) is _StandardLogger)

    def test_base_logger_is_abstract(self):
        self.assertRaises(TypeError, _Logger)

    def test_debug_called_on_logging(self):
        msg = "debug msg"
        self.logger.debug(msg)
        self.logger.logger.debug.assert_called_with(self.expected_prefix + msg)

    def test_info_called_on_logging(self):
        msg = "info msg"
        self.logger.info(msg)
        self.logger.logger.info.assert_called_with(self.expected_prefix + msg)

    def test_warning_called_on_logging(self):
        msg = "warning msg"
        self.logger.warning(msg)
        self.logger.logger.warning.assert_called_with(self.expected_prefix + msg)

    def test_error_called_on_logging(self):
        msg = "error msg"
        self.logger.error(msg)
        self.logger.logger.error.assert_called_with(self.expected_prefix + msg)

    def test_logger_names(self):
        self.assertEqual("cos", get_logger().logger.name)
        self.assertEqual("cos.modules.client.signer", get_logger("cos.modules.client.signer").logger.name)
        self.assertEqual("cos.test_channel", get_logger("test_channel").logger.name)

    def test_prefix_without_channel(self):
        self.assertEqual("[COSClient] ", get_logger().prefix)

    def test_messages_reach_standard_logging(self):
        logger = get_logger("cos.test")
        with self.assertLogs("cos.test", level=logging.WARNING) as captured:
            logger.warning("warning msg")
        self.assertEqual(["WARNING:cos.test:[COSClient][cos.test] warning msg"], captured.output)
