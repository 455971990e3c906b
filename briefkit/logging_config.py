"""Logging setup shared by the CLI and the web server."""

import copy
import logging
import logging.config

from . import config

LOGGING_CONFIG = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'standard': {
            'format': '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
        },
    },
    'handlers': {
        'default': {
            'level': 'DEBUG',
            'formatter': 'standard',
            'class': 'logging.StreamHandler',
            # stdout carries CLI artifacts and the machine summary line
            'stream': 'ext://sys.stderr',
        },
    },
    'loggers': {
        '': {
            'handlers': ['default'],
            'level': 'INFO',
            'propagate': True
        }
    }
}


def build_logging_config(level=None, log_file=None):
    """Return a dictConfig mapping for the given level and optional log file."""
    level = (level or config.get_log_level()).upper()
    log_file = log_file or config.get_log_file()

    logging_config = copy.deepcopy(LOGGING_CONFIG)
    logging_config['loggers']['']['level'] = level
    if log_file:
        logging_config['handlers']['file'] = {
            'level': 'DEBUG',
            'formatter': 'standard',
            'class': 'logging.FileHandler',
            'filename': log_file,
            'mode': 'a',
            'encoding': 'utf-8',
        }
        logging_config['loggers']['']['handlers'].append('file')
    return logging_config


def configure_logging(level=None, log_file=None):
    logging.config.dictConfig(build_logging_config(level, log_file))
    logging.getLogger(__name__).debug("Logging configured at %s", level or config.get_log_level())
