##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other MDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to MDB.
##############################################################################

"""This module handles setting up the logging system in MDB."""

import logging
import sys

import coloredlogs


DEFAULT_LOG_LEVEL = "INFO"

FORMATS = {
    "DEFAULT": "[%(asctime)s: %(levelname)s] %(message)s",
    "DEBUG": "[%(asctime)s: %(levelname)s] [%(module)s: %(lineno)d] %(message)s",
}


def setup_logging(logger: logging.Logger, log_level: str = "INFO", colors: bool = True):
    """
    Setup and configure Python logging.

    Args:
        logger: A logging.Logger object.
        log_level: Logger level.
        colors: If True use colored logs.
    """
    fmt = FORMATS["DEBUG"] if log_level.upper() == "DEBUG" else FORMATS["DEFAULT"]
    formatter = logging.Formatter(fmt)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    logger.setLevel(log_level)
    logger.propagate = False

    if colors is True:
        coloredlogs.install(level=log_level, logger=logger, fmt=fmt)


def set_log_level(logger: logging.Logger, log_level: str):
    """
    Change the level of an already configured logger and of every handler on it.

    Handlers installed by `setup_logging` carry their own level, so lowering only
    the logger's level would still drop the more verbose records at the handler.

    Args:
        logger: A logging.Logger object.
        log_level: The new level name, e.g. "DEBUG".
    """
    level = coloredlogs.level_to_number(log_level)
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)
