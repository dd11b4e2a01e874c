##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other MDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to MDB.
##############################################################################

"""
MDB CLI Commands Package.

Modules:
    command_entry_point: Defines the abstract base class `CommandEntryPoint` for all CLI commands.
    config: Implements the `config` command for writing a template configuration file.
    info: Implements the `info` command for displaying the resolved configuration.
    serve: Implements the `serve` command that runs the HTTP API.
"""

from mdb.cli.commands.config import ConfigCommand
from mdb.cli.commands.info import InfoCommand
from mdb.cli.commands.serve import ServeCommand


# Keep these in alphabetical order
ALL_COMMANDS = [
    ConfigCommand(),
    InfoCommand(),
    ServeCommand(),
]
