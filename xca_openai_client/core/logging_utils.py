import logging
from typing import Optional, Union

from .config import LOG_LEVEL_FROM_ENV

LOG_FORMAT = '%(asctime)s %(levelname)-8s [%(name)s:%(module)s:%(lineno)d] - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

ROOT_LOGGER_NAME = "XCAOpenAIClient"

_console_handler: Optional[logging.Handler] = None


def configure_logging(level: Optional[Union[str, int]] = None) -> logging.Logger:
    """
    配置 XCAOpenAIClient 日志记录器（控制台输出）
    Safe to call more than once: the console handler is only installed once.
    """
    global _console_handler

    if level is None:
        level = LOG_LEVEL_FROM_ENV
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    package_logger.setLevel(level)

    if _console_handler is None:
        _console_handler = logging.StreamHandler()
        _console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        package_logger.addHandler(_console_handler)

    for lib_logger_name in ["httpx", "httpcore"]:
        logging.getLogger(lib_logger_name).setLevel(logging.WARNING)

    return package_logger
