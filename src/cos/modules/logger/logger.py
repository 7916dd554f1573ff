import abc
import logging

_ROOT_LOGGER_NAME = "cos"


def get_logger(channel=None):
    """
    Provides the default logger for the application.
    """
    return _StandardLogger(channel)


class _Logger(object, metaclass=abc.ABCMeta):
    """
    The base class for logger, all loggers have to extend this class and provide implementation for the basic logging methods.
    """

    @abc.abstractmethod
    def debug(self, msg):
        pass

    @abc.abstractmethod
    def info(self, msg):
        pass

    @abc.abstractmethod
    def warning(self, msg):
        pass

    @abc.abstractmethod
    def error(self, msg):
        pass


class _StandardLogger(_Logger):
    """
    The wrapper class for the standard library logging functionalities.
    """
    _CLIENT = "COSClient"

    def __init__(self, channel):
        self.channel = channel
        self.prefix = self._build_prefix()
        self.logger = logging.getLogger(self._build_logger_name())

    def _build_prefix(self):
        """
        Creates a prefix which will be attached to each message passed through this logger.
        Format example: "[COSClient][cos.modules.client.cosclient] "
        """
        prefix = []
        if _StandardLogger._CLIENT:
            prefix.append("[" + _StandardLogger._CLIENT + "]")
        if self.channel:
            prefix.append("[" + self.channel + "]")
        return "".join(prefix) + " "

    def _build_logger_name(self):
        if not self.channel:
            return _ROOT_LOGGER_NAME
        if self.channel == _ROOT_LOGGER_NAME or self.channel.startswith(_ROOT_LOGGER_NAME + "."):
            return self.channel
        return _ROOT_LOGGER_NAME + "." + self.channel

    def debug(self, msg):
        self.logger.debug(self.prefix + msg)

    def info(self, msg):
        self.logger.info(self.prefix + msg)

    def warning(self, msg):
        self.logger.warning(self.prefix + msg)

    def error(self, msg):
        self.logger.error(self.prefix + msg)
