##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other MDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to MDB.
##############################################################################

"""
Tests for the `info.py` file of the `cli/commands` folder.
"""

from argparse import Namespace

from pytest_mock import MockerFixture

from mdb.cli.commands.info import InfoCommand
from tests.fixture_types import FixtureCallable


def test_info_parser_sets_func(create_parser: FixtureCallable):
    """
    Ensure the `info` command sets the correct default function.

    Args:
        create_parser: A function that builds a parser around one command.
    """
    command = InfoCommand()
    args = create_parser(command).parse_args(["info", "--config", "app.yaml"])
    assert args.config == "app.yaml"
    assert args.func.__name__ == command.process_command.__name__


def test_info_process_command_calls_display(mocker: MockerFixture):
    """
    Ensure that `process_command` loads the configuration and prints it.

    Args:
        mocker: PyTest mocker fixture.
    """
    mock_load = mocker.patch("mdb.config.configfile.load_app_config")
    mock_print_info = mocker.patch("mdb.display.print_info")

    InfoCommand().process_command(Namespace(config="/tmp/app.yaml"))

    mock_load.assert_called_once_with("/tmp/app.yaml")
    mock_print_info.assert_called_once_with(mock_load.return_value)
