##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other MDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to MDB.
##############################################################################

"""
CLI module for displaying configuration and environment information.

This module defines the `InfoCommand` class, which handles the `info`
subcommand. It prints the resolved configuration (with secrets masked) and the
static metadata of every supported backend, which is useful for debugging a
deployment before starting the server.
"""

import logging
from argparse import ArgumentParser, Namespace

from mdb.cli.commands.command_entry_point import CommandEntryPoint


LOG = logging.getLogger(__name__)


class InfoCommand(CommandEntryPoint):
    """
    Handles `info` CLI command for viewing the resolved configuration.

    Methods:
        add_parser: Adds the `info` command to the CLI parser.
        process_command: Prints the configuration and backend information.
    """

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `info` command parser to the CLI argument parser.

        Parameters:
            subparsers (ArgumentParser): The subparsers object to which the `info` command parser will be added.
        """
        info: ArgumentParser = subparsers.add_parser(
            "info",
            help="display info about the MDB configuration and the supported databases. Useful for debugging.",
        )
        info.set_defaults(func=self.process_command)
        info.add_argument(
            "--config",
            type=str,
            default=None,
            help="Path to an app.yaml file or a directory containing one.",
        )

    def process_command(self, args: Namespace):
        """
        CLI command to print MDB configuration info.

        Args:
            args: Parsed CLI arguments.
        """
        from mdb import display  # pylint: disable=import-outside-toplevel
        from mdb.config.configfile import load_app_config  # pylint: disable=import-outside-toplevel

        display.print_info(load_app_config(args.config))
