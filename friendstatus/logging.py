"""Logging helpers shared by all of the services."""

import logging
import os
import sys
from typing import Optional

FORMAT = '%(asctime)s - %(process)d: [%(name)s] %(levelname)s: %(message)s'
DATEFMT = '%d/%b/%Y:%H:%M:%S %z'


def getLogger(name: str, fmt: Optional[str] = None) -> logging.Logger:
    """
    Get a logger with the level and handlers set from the environment.

    ``LOGLEVEL`` is a numeric level (default 20, INFO). If ``LOGFILE`` is
    set, records are also written there.
    """
    logger = logging.getLogger(name)
    level = int(os.environ.get('LOGLEVEL', '20'))
    logger.setLevel(level)
    if logger.handlers:     # Already configured.
        return logger

    formatter = logging.Formatter(fmt or FORMAT, datefmt=DATEFMT)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    logfile = os.environ.get('LOGFILE')
    if logfile:
        file_handler = logging.FileHandler(logfile)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
    logger.propagate = False
    return logger
