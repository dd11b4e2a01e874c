##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other MDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to MDB.
##############################################################################

"""
CLI module for running the MDB HTTP server.

This module defines the `ServeCommand` class, which handles the `serve`
subcommand. It resolves the configuration, builds the FastAPI application and
runs it under uvicorn until interrupted.
"""

import logging
from argparse import ArgumentParser, Namespace

import uvicorn

from mdb.api.app import create_app
from mdb.cli.commands.command_entry_point import CommandEntryPoint
from mdb.config.configfile import load_app_config
from mdb.log_formatter import DEFAULT_LOG_LEVEL, set_log_level


LOG = logging.getLogger(__name__)


class ServeCommand(CommandEntryPoint):
    """
    Handles the `serve` CLI command.

    Methods:
        add_parser: Adds the `serve` command to the CLI parser.
        process_command: Starts the HTTP server.
    """

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `serve` command parser to the CLI argument parser.

        Parameters:
            subparsers (ArgumentParser): The subparsers object to which the `serve` command parser will be added.
        """
        serve: ArgumentParser = subparsers.add_parser("serve", help="Run the MDB HTTP API.")
        serve.set_defaults(func=self.process_command)
        serve.add_argument(
            "--host", type=str, default=None, help="Interface to bind. Default: server.host from the config"
        )
        serve.add_argument("--port", type=int, default=None, help="Port to bind. Default: server.port from the config")
        serve.add_argument(
            "--config",
            type=str,
            default=None,
            help="Path to an app.yaml file or a directory containing one.",
        )
        serve.add_argument(
            "--no-connect",
            action="store_true",
            help="Do not connect the databases at startup; connect each one on first use instead.",
        )

    def process_command(self, args: Namespace):
        """
        Build the application and serve it with uvicorn.

        Args:
            args: Parsed CLI arguments.
        """
        config = load_app_config(args.config)
        if args.host is not None:
            config.server.host = args.host
        if args.port is not None:
            config.server.port = args.port

        # An explicit -lvl wins over the configured level
        log_level = args.level if args.level.upper() != DEFAULT_LOG_LEVEL else str(config.server.log_level)
        set_log_level(logging.getLogger("mdb"), log_level)

        app = create_app(config, connect_on_startup=not args.no_connect)
        LOG.info(f"MDB Backend server starting on {config.server.host}:{config.server.port}")
        uvicorn.run(app, host=config.server.host, port=int(config.server.port), log_level=log_level.lower())
