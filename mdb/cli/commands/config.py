##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other MDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to MDB.
##############################################################################

"""
CLI command for managing MDB configuration files.

This module defines the `ConfigCommand` class, which provides the CLI interface
to write a template `app.yaml` that can then be edited by hand.
"""

import logging
from argparse import ArgumentParser, Namespace

from mdb.cli.commands.command_entry_point import CommandEntryPoint
from mdb.config.config_filepaths import MDB_HOME
from mdb.config.configfile import create_template_config


LOG = logging.getLogger(__name__)


class ConfigCommand(CommandEntryPoint):
    """
    CLI command group for managing MDB configuration files.

    Methods:
        add_parser: Adds the `config` command and its subcommands to the CLI parser.
        process_command: Processes the CLI input and dispatches the appropriate action.
    """

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `config` command parser and its subcommands to the CLI argument parser.

        Parameters:
            subparsers (ArgumentParser): The subparsers object to which the `config` command parser will be added.
        """
        mconfig: ArgumentParser = subparsers.add_parser("config", help="Manage the MDB configuration file.")
        mconfig.set_defaults(func=self.process_command)
        mconfig_subparsers = mconfig.add_subparsers(dest="commands", required=True)

        config_create_parser = mconfig_subparsers.add_parser("create", help="Create a new configuration file.")
        config_create_parser.add_argument(
            "-o",
            "--output-dir",
            dest="output_dir",
            type=str,
            default=MDB_HOME,
            help=f"Directory to write app.yaml to. Default: {MDB_HOME}",
        )

    def process_command(self, args: Namespace):
        """
        Dispatch the `config` subcommand.

        Args:
            args: Parsed CLI arguments.
        """
        if args.commands == "create":
            path = create_template_config(args.output_dir)
            LOG.info(f"Configuration template written to {path}. Edit it before running `mdb serve`.")
