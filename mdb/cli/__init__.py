##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other MDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to MDB.
##############################################################################

"""
The `cli` package contains the command-line interface for MDB.

Modules:
    argparse_main: Builds the top-level `mdb` argument parser.

Subpackages:
    commands: One `CommandEntryPoint` implementation per `mdb` subcommand.
"""
