##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other MDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to MDB.
##############################################################################

"""
This module contains pytest fixtures to be used throughout the entire test suite.
"""
import os
from glob import glob

import pytest

from tests.fixture_types import FixtureModification, FixtureStr


#######################################
# Loading in Module Specific Fixtures #
#######################################

fixture_glob = os.path.join("tests", "fixtures", "**", "*.py")
pytest_plugins = [
    fixture_file.replace(os.sep, ".").replace(".py", "")
    for fixture_file in glob(fixture_glob, recursive=True)
    if not fixture_file.endswith("__init__.py")
]


#######################################
######### Fixture Definitions #########
#######################################


@pytest.fixture
def sqlite_db_path(tmp_path) -> FixtureStr:
    """
    The path of a SQLite database file inside a fresh temporary directory. The
    file itself does not exist until a driver connects to it.

    Args:
        tmp_path: A built in pytest fixture providing a unique temporary directory.

    Returns:
        The path to the database file.
    """
    return os.path.join(str(tmp_path), "data", "postal_codes.db")


@pytest.fixture
def clean_environ(mocker) -> FixtureModification:
    """
    Remove every MDB-related environment variable for the duration of a test.

    Args:
        mocker: PyTest mocker fixture.
    """
    from mdb.config.configfile import ENV_OVERRIDES  # pylint: disable=import-outside-toplevel

    cleaned = {key: val for key, val in os.environ.items() if key not in ENV_OVERRIDES and key != "MDB_DEBUG"}
    mocker.patch.dict(os.environ, cleaned, clear=True)
