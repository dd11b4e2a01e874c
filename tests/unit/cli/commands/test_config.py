##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other MDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to MDB.
##############################################################################

"""
Tests for the `config.py` file of the `cli/commands` folder.
"""

from argparse import Namespace

from pytest_mock import MockerFixture

from mdb.cli.commands.config import ConfigCommand
from mdb.config.config_filepaths import MDB_HOME
from tests.fixture_types import FixtureCallable


def test_config_create_parser(create_parser: FixtureCallable):
    """
    Ensure `config create` defaults its output directory to `MDB_HOME`.

    Args:
        create_parser: A function that builds a parser around one command.
    """
    command = ConfigCommand()
    parser = create_parser(command)

    assert parser.parse_args(["config", "create"]).output_dir == MDB_HOME
    args = parser.parse_args(["config", "create", "-o", "/tmp/conf"])
    assert args.output_dir == "/tmp/conf"
    assert args.func.__name__ == command.process_command.__name__


def test_config_create_writes_template(mocker: MockerFixture):
    """
    Ensure `config create` writes the template to the requested directory.

    Args:
        mocker: PyTest mocker fixture.
    """
    mock_create = mocker.patch("mdb.cli.commands.config.create_template_config", return_value="/tmp/conf/app.yaml")

    ConfigCommand().process_command(Namespace(commands="create", output_dir="/tmp/conf"))

    mock_create.assert_called_once_with("/tmp/conf")
