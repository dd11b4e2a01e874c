##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other MDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to MDB.
##############################################################################

"""
MDB: one HTTP surface over five postal-code databases.

This module contains the source code for MDB.
"""

__version__ = "1.0.0"
VERSION = __version__

SERVICE_NAME = "MDB Backend API"
