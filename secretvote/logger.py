"""Logging setup for the command line.

Library modules only create loggers under the `secretvote` namespace; the
handler and format are installed by `configure`.
"""
import logging
from typing import Union

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
logger = logging.getLogger("secretvote")


def configure(level: Union[int, str] = logging.WARNING) -> None:
    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(format=LOG_FORMAT)
    logger.setLevel(level)
