# -*- coding: utf-8 -*-

import os
import sys
import copy
import socket
import logging
import logging.config


# Pacemaker reads a resource agent's stdout as the action's result
# (meta-data), so nothing is ever logged there.

class ConsoleCustomHandler(logging.StreamHandler):
    """
    A custom handler for console

    Every record goes to the sys.stderr of the moment, which the cluster
    manager collects into its own log.
    """

    def emit(self, record):
        try:
            msg = self.format(record)
            sys.stderr.write(msg)
            sys.stderr.write(self.terminator)
        except Exception:
            self.handleError(record)


class DebugCustomFilter(logging.Filter):
    """
    A custom filter for debug messages
    """
    def filter(self, record):
        from .config import core
        if record.levelno == logging.DEBUG:
            return core.debug
        return True


LOGGING_CFG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "console": {
            "format": "%(levelname)s: %(message)s",
        },
        "file": {
            "format": "%(asctime)s {} %(name)s: %(levelname)s: %(message)s".format(socket.gethostname()),
            "datefmt": "%Y-%m-%dT%H:%M:%S%z",
        }
    },
    "filters": {
        "filter": {
            "()": DebugCustomFilter
        },
    },
    "handlers": {
        'null': {
            'class': 'logging.NullHandler'
        },
        "console": {
            "()": ConsoleCustomHandler,
            "formatter": "console",
            "level": "WARNING",
        },
        "file": {
            'class': 'logging.NullHandler'
        }
    },
    "loggers": {
        "zfsra": {
            "handlers": ["null", "file", "console"],
            "level": "DEBUG"
        }
    }
}


def log_file(pool, log_dir):
    """
    Debug log of one pool, so that concurrent agents on different pools do
    not interleave their records
    """
    return os.path.join(log_dir, "{}.log".format(pool.replace('/', '_') or "unknown"))


def _file_handler_cfg(filename):
    return {
        "class": "logging.FileHandler",
        "filename": filename,
        "formatter": "file",
        "filters": ["filter"],
        "delay": True,
    }


def setup_logging(pool="", debug=False, log_dir=None):
    """
    Load the logging config dict

    The per-pool file sink only exists when debug is on. A log file that
    cannot be opened is reported on stderr and replaced by a NullHandler;
    the action itself goes on.
    """
    from . import config
    cfg = copy.deepcopy(LOGGING_CFG)
    if debug:
        if log_dir is None:
            log_dir = config.path.log_dir
        filename = log_file(pool, log_dir)
        try:
            os.makedirs(log_dir, exist_ok=True)
            with open(filename, 'a'):
                pass
        except OSError as e:
            print('WARNING: Failed to open log file: {}'.format(e), file=sys.stderr)
        else:
            cfg["handlers"]["file"] = _file_handler_cfg(filename)
    # a failing handler must not turn into a failing action
    logging.raiseExceptions = False
    logging.config.dictConfig(cfg)


def setup_logger(name):
    """
    Get the logger
    name is a module name under zfsra, records propagate to the "zfsra"
    logger configured by setup_logging
    """
    return logging.getLogger(name)
