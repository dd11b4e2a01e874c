##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other MDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to MDB.
##############################################################################

"""
Module for project-wide utility functions.
"""
import logging
import sys
from datetime import datetime, timezone
from importlib import metadata
from types import SimpleNamespace
from typing import Any, Dict, List

import yaml
from tabulate import tabulate


LOG = logging.getLogger(__name__)


def load_yaml(filepath: str) -> Dict:
    """
    Safely read a YAML file and return its contents.

    Args:
        filepath: The file path to the YAML file to be read.

    Returns:
        A dict representing the contents of the YAML file.
    """
    with open(filepath, "r") as _file:
        return yaml.safe_load(_file)


def nested_dict_to_namespaces(dic: Dict) -> SimpleNamespace:
    """
    Convert a nested dictionary into a nested SimpleNamespace structure.

    Each key in the dictionary becomes an attribute of a SimpleNamespace, allowing
    for attribute-style access to the data. The input dictionary is not modified.

    Args:
        dic: The nested dictionary to be converted.

    Returns:
        A SimpleNamespace object representing the nested structure of the input dictionary.

    Raises:
        TypeError: If the input is not a dictionary.
    """
    if not isinstance(dic, dict):
        raise TypeError(f"Expected a dict, got {type(dic).__name__}.")

    def recurse(value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        return SimpleNamespace(**{key: recurse(val) for key, val in value.items()})

    return recurse(dic)


def utc_timestamp() -> str:
    """
    Current time in the ISO-8601 form used by every HTTP response.

    Returns:
        A string like `2025-01-31T07:37:35.123Z`.
    """
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def get_package_versions(package_list: List[str]) -> str:
    """
    Generate a formatted table of installed package versions and their locations.

    If a package is not installed, the table says so instead of failing. The
    Python version and its executable location are listed first.

    Args:
        package_list: A list of distribution names to check.

    Returns:
        A formatted string representing a table of package names, their versions,
            and installation locations.
    """
    table = []
    for package in package_list:
        try:
            distribution = metadata.distribution(package)
            table.append([package, distribution.version, str(distribution.locate_file(""))])
        except metadata.PackageNotFoundError:
            table.append([package, "Not installed", "N/A"])

    table.insert(0, ["python", sys.version.split()[0], sys.executable])
    table_str = tabulate(table, headers=["Package", "Version", "Location"], tablefmt="simple")
    return f"Python Packages\n\n{table_str}\n"
