##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other MDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to MDB.
##############################################################################

"""
Used to store the application configuration.

The `config` package loads the `app.yaml` file (if there is one), layers the
environment variable overrides on top of it, and exposes the result as a
`Config` object with one namespace per section.

Modules:
    config_filepaths.py: Constants for where configuration files live.
    configfile.py: Locating, loading, defaulting and overriding the configuration.
"""
from types import SimpleNamespace
from typing import Dict, List, Optional

from mdb.utils import nested_dict_to_namespaces


SECTIONS: List[str] = ["server", "mysql", "postgresql", "mongodb", "sqlite", "oracle"]
SECRET_KEYS: List[str] = ["password", "uri"]


class Config:  # pylint: disable=R0903
    """
    The Config class, meant to store all MDB config settings in one place.
    Regardless of the config data loading method, this class is meant to
    standardize config data retrieval throughout all parts of MDB.

    Attributes:
        server (Optional[SimpleNamespace]): HTTP server settings (host, port, log level, error exposure).
        mysql (Optional[SimpleNamespace]): MySQL/MariaDB connection settings.
        postgresql (Optional[SimpleNamespace]): PostgreSQL connection settings.
        mongodb (Optional[SimpleNamespace]): MongoDB connection settings.
        sqlite (Optional[SimpleNamespace]): SQLite file settings.
        oracle (Optional[SimpleNamespace]): Oracle connection settings.

    Methods:
        __str__: Returns a formatted string representation of the Config instance.
        load_app_into_namespaces: Converts the provided configuration dictionary into namespaces
            and assigns them to the Config instance's attributes.
        backend_settings: Return the settings namespace for one backend.
    """

    def __init__(self, app_dict: Dict):
        """
        Initializes the Config instance with configuration data from a dictionary.

        Args:
            app_dict: A dictionary containing configuration data for the application.
                Each top-level key listed in `SECTIONS` is converted into a
                `SimpleNamespace` and assigned to the matching attribute.
        """
        self.server: Optional[SimpleNamespace] = None
        self.mysql: Optional[SimpleNamespace] = None
        self.postgresql: Optional[SimpleNamespace] = None
        self.mongodb: Optional[SimpleNamespace] = None
        self.sqlite: Optional[SimpleNamespace] = None
        self.oracle: Optional[SimpleNamespace] = None
        self.load_app_into_namespaces(app_dict)

    def __str__(self) -> str:
        """
        Returns a formatted string representation of the Config instance.
        Secret values are masked.

        Returns:
            A string containing the values of every section.
        """
        formatted_str = "config:"
        for name in SECTIONS:
            attr = getattr(self, name)
            if attr is not None:
                items = (
                    f"    {k}: {'******' if k in SECRET_KEYS and v else repr(v)}" for k, v in attr.__dict__.items()
                )
                joined_items = "\n".join(items)
                formatted_str += f"\n  {name}:\n{joined_items}"
            else:
                formatted_str += f"\n  {name}:\n    None"
        return formatted_str

    def load_app_into_namespaces(self, app_dict: Dict):
        """
        Converts the provided application dictionary into namespaces and assigns them
        to the Config instance's attributes.

        Args:
            app_dict: A dictionary containing configuration data for the application.
        """
        for field in SECTIONS:
            try:
                setattr(self, field, nested_dict_to_namespaces(app_dict[field]))
            except KeyError:
                # The sections are optional
                pass

    def backend_settings(self, backend: str) -> SimpleNamespace:
        """
        Return the settings namespace for one backend.

        Args:
            backend: The backend tag (e.g. "mysql").

        Returns:
            The namespace for that backend, or an empty namespace if the section is missing.
        """
        settings = getattr(self, backend, None) if backend in SECTIONS else None
        return settings if settings is not None else SimpleNamespace()
