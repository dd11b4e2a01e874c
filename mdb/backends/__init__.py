##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other MDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to MDB.
##############################################################################

"""
Backend infrastructure for the MDB application.

The `backends` package wraps the five storage engines behind one capability
interface (`BackendDriver`) and keeps at most one live connection per engine.

Subpackages:
    mysql: MySQL/MariaDB driver built on aiomysql.
    postgresql: PostgreSQL driver built on asyncpg.
    mongodb: MongoDB driver built on motor.
    sqlite: SQLite driver built on aiosqlite, including the schema administration helpers.
    oracle: Oracle driver built on python-oracledb.

Modules:
    backend_driver: Defines the abstract `BackendDriver` base class.
    backend_factory: Contains `BackendFactory`, used to validate tags and instantiate drivers.
    connection_registry: Contains `ConnectionRegistry`, the owner of every live connection.
"""
