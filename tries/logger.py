"""Logging configuration for the tries package."""

import logging
import os
import sys
from enum import IntEnum
from logging.config import dictConfig

_FORMAT = "%(levelname)s %(asctime)s [%(filename)s:%(lineno)d] %(message)s"
_DATE_FORMAT = "%m-%d %H:%M:%S"


class LogLevel(IntEnum):
  """Logging levels for the tries package"""
  DEBUG = logging.DEBUG
  INFO = logging.INFO
  WARNING = logging.WARNING
  ERROR = logging.ERROR
  CRITICAL = logging.CRITICAL


def _get_default_logging_level():
  """Logging level from ABSTRIE_LOGGING_LEVEL, WARNING when unset."""
  return os.getenv("ABSTRIE_LOGGING_LEVEL", "WARNING").upper()


def _should_use_color():
  if os.getenv("NO_COLOR"):
    return False

  color_setting = os.getenv("ABSTRIE_LOGGING_COLOR", "auto")
  if color_setting == "0" or color_setting.lower() == "false":
    return False
  if color_setting == "1" or color_setting.lower() == "true":
    return True
  return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


class ColoredFormatter(logging.Formatter):
  """Colored log formatter"""

  COLORS = {
    'DEBUG': '\033[36m',
    'INFO': '\033[32m',
    'WARNING': '\033[33m',
    'ERROR': '\033[31m',
    'CRITICAL': '\033[1;31m',
  }
  RESET = '\033[0m'

  def format(self, record):
    log_color = self.COLORS.get(record.levelname, self.RESET)
    record.levelname = f"{log_color}{record.levelname}{self.RESET}"
    return super().format(record)


DEFAULT_LOGGING_CONFIG = {
  "version": 1,
  "disable_existing_loggers": False,
  "formatters": {
    "default": {
      "format": _FORMAT,
      "datefmt": _DATE_FORMAT,
    },
    "colored": {
      "()": ColoredFormatter,
      "format": _FORMAT,
      "datefmt": _DATE_FORMAT,
    },
  },
  "handlers": {
    "default": {
      "class": "logging.StreamHandler",
      "formatter": "colored" if _should_use_color() else "default",
      "level": _get_default_logging_level(),
      "stream": "ext://sys.stderr",
    },
  },
  "loggers": {
    "tries": {
      "handlers": ["default"],
      "level": _get_default_logging_level(),
      "propagate": False,
    },
  },
}


def init_logger(name):
  """Return a logger under the `tries` hierarchy.

  Args:
      name: Name of the logger (typically __name__)
  """
  return logging.getLogger(name)


def set_logging_level(level):
  """Set the level of every `tries` logger and handler.

  Args:
      level: Level name ("DEBUG", "info", ...) or a LogLevel / int.
  """
  if hasattr(level, 'upper'):
    level = level.upper()
  logger = logging.getLogger("tries")
  logger.setLevel(level)
  for handler in logger.handlers:
    handler.setLevel(level)


def _package_loggers():
  names = [name for name in logging.root.manager.loggerDict
           if name == "tries" or name.startswith("tries.")]
  return [logging.getLogger(name) for name in names]


def disable_logging():
  """Silence the `tries` logger and every module logger below it."""
  for logger in _package_loggers():
    logger.disabled = True


def enable_logging():
  for logger in _package_loggers():
    logger.disabled = False


dictConfig(DEFAULT_LOGGING_CONFIG)
