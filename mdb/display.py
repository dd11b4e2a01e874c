##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other MDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to MDB.
##############################################################################

"""
Manages formatting for displaying information to the console.
"""
import logging
import os
from typing import Dict, List

from tabulate import tabulate

from mdb import SERVICE_NAME, VERSION
from mdb.backends.backend_factory import backend_factory
from mdb.config import SECRET_KEYS, SECTIONS, Config
from mdb.utils import get_package_versions


LOG = logging.getLogger(__name__)

PACKAGE_LIST = [
    "pip",
    "mdb",
    "fastapi",
    "uvicorn",
    "aiomysql",
    "asyncpg",
    "motor",
    "aiosqlite",
    "oracledb",
]


def config_rows(config: Config) -> List[List[str]]:
    """
    Flatten a `Config` object into `[section.key, value]` rows, masking secrets.

    Args:
        config: The configuration to flatten.

    Returns:
        One row per setting.
    """
    rows = []
    for section in SECTIONS:
        namespace = getattr(config, section, None)
        if namespace is None:
            continue
        for key, value in vars(namespace).items():
            shown = "******" if key in SECRET_KEYS and value else value
            rows.append([f"{section}.{key}", shown])
    return rows


def backend_rows(info: Dict[str, Dict]) -> List[List[str]]:
    """
    Turn the static backend metadata into table rows.

    Args:
        info: The output of `BackendFactory.backend_info`.

    Returns:
        One `[name, type, port, features]` row per backend.
    """
    return [[name, meta["type"], meta["port"], ", ".join(meta["features"])] for name, meta in info.items()]


def display_config_info(config: Config):
    """
    Prints the resolved configuration of the MDB application to the console.

    Args:
        config: The configuration to print.
    """
    print("MDB Configuration")
    print("-" * 25)
    print("")
    print(tabulate(config_rows(config), tablefmt="presto"))


def display_backend_info():
    """
    Prints the static metadata of every supported backend to the console.
    """
    print("Supported Databases")
    print("-" * 25)
    print("")
    rows = backend_rows(backend_factory.backend_info())
    print(tabulate(rows, headers=["Database", "Type", "Default Port", "Features"], tablefmt="simple"))


def print_info(config: Config):
    """
    Provide version and location information about python and packages to
    facilitate user troubleshooting, along with the resolved configuration.

    Args:
        config: The configuration to print.
    """
    print(f"{SERVICE_NAME} {VERSION}")
    print("")
    display_config_info(config)

    print("")
    display_backend_info()

    print("")
    print("Python Configuration")
    print("-" * 25)
    print("")
    print(get_package_versions(PACKAGE_LIST))
    pythonpath = os.environ.get("PYTHONPATH")
    print(f"$PYTHONPATH: {pythonpath}")
