##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other MDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to MDB.
##############################################################################

"""
Test the functionality of the Config object.
"""

from types import SimpleNamespace

from mdb.config import Config


class TestConfig:
    """
    Class for testing the Config object. We'll store a valid `app_dict`
    as an attribute here so that each test doesn't have to redefine it
    each time.
    """

    app_dict = {
        "server": {"host": "0.0.0.0", "port": 3001, "log_level": "INFO", "expose_errors": True},
        "mysql": {"host": "127.0.0.1", "port": 3307, "user": "mdb_user", "password": "secret", "database": "db"},
        "sqlite": {"path": "./data/postal_codes.db"},
    }

    def test_config_creation(self):
        """
        Test that each section becomes a namespace and missing sections stay `None`.
        """
        config = Config(self.app_dict)

        assert config.server == SimpleNamespace(**self.app_dict["server"])
        assert config.mysql == SimpleNamespace(**self.app_dict["mysql"])
        assert config.sqlite.path == "./data/postal_codes.db"
        assert config.postgresql is None
        assert config.oracle is None

    def test_unknown_sections_are_ignored(self):
        """
        Test that top-level keys outside the known sections are not loaded.
        """
        config = Config({"redis": {"host": "localhost"}})
        assert "redis" not in vars(config)

    def test_config_str_masks_secrets(self):
        """
        Test that the string form lists every section and hides passwords.
        """
        config_str = str(Config(self.app_dict))

        assert "  mysql:" in config_str
        assert "password: ******" in config_str
        assert "secret" not in config_str
        assert "  oracle:\n    None" in config_str

    def test_backend_settings(self):
        """
        Test that backend settings fall back to an empty namespace for missing sections.
        """
        config = Config(self.app_dict)

        assert config.backend_settings("mysql") is config.mysql
        assert config.backend_settings("oracle") == SimpleNamespace()
        assert config.backend_settings("redis") == SimpleNamespace()
