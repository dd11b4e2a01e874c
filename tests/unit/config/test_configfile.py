##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other MDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to MDB.
##############################################################################

"""
Tests for the configfile.py module.
"""

import os

import pytest
import yaml

from mdb.config.configfile import (
    DEFAULT_CONFIG,
    apply_env_overrides,
    create_template_config,
    find_config_file,
    get_config,
    get_default_config,
    is_debug,
    load_app_config,
    load_config,
    load_defaults,
)
from tests.fixture_types import FixtureModification


def write_app_yaml(directory: str, contents: dict) -> str:
    """Write `contents` as an app.yaml file in `directory` and return its path."""
    filepath = os.path.join(directory, "app.yaml")
    with open(filepath, "w") as app_file:
        yaml.dump(contents, app_file)
    return filepath


def test_get_default_config_is_a_copy():
    """
    Test that mutating the defaults handed out does not change the module defaults.
    """
    defaults = get_default_config()
    defaults["server"]["port"] = 1

    assert DEFAULT_CONFIG["server"]["port"] == 3001


def test_load_config_missing_file(tmp_path):
    """
    Test that loading a file that does not exist returns None.

    Args:
        tmp_path: A built in pytest fixture providing a unique temporary directory.
    """
    assert load_config(os.path.join(str(tmp_path), "app.yaml")) is None


def test_load_defaults_fills_gaps():
    """
    Test that partial sections keep their values and get the rest from the defaults.
    """
    config = {"mysql": {"host": "db.internal"}, "sqlite": None}

    load_defaults(config)

    assert config["mysql"]["host"] == "db.internal"
    assert config["mysql"]["port"] == 3307
    assert config["sqlite"] == {"path": "./data/postal_codes.db"}
    assert set(config) == set(DEFAULT_CONFIG)


class TestFindConfigFile:
    """Tests for locating the app.yaml file."""

    def test_explicit_file_and_directory(self, tmp_path):
        """
        Test that an explicit path may name the file or its directory.

        Args:
            tmp_path: A built in pytest fixture providing a unique temporary directory.
        """
        filepath = write_app_yaml(str(tmp_path), {})

        assert find_config_file(filepath) == filepath
        assert find_config_file(str(tmp_path)) == filepath
        assert find_config_file(os.path.join(str(tmp_path), "missing")) is None

    def test_default_search_uses_cwd(self, tmp_path, monkeypatch: pytest.MonkeyPatch):
        """
        Test that without a path the current working directory is searched first.

        Args:
            tmp_path: A built in pytest fixture providing a unique temporary directory.
            monkeypatch: A built in pytest fixture for changing the working directory.
        """
        filepath = write_app_yaml(str(tmp_path), {})
        monkeypatch.chdir(tmp_path)

        assert find_config_file() == filepath


class TestEnvOverrides:
    """Tests for the environment variable overrides."""

    def test_overrides_are_converted(self):
        """
        Test that numeric variables are converted and text variables copied.
        """
        config = get_default_config()

        apply_env_overrides(
            config,
            {
                "MYSQL_PORT": "3306",
                "POSTGRES_HOST": "pg",
                "SQLITE_PATH": "/data/p.db",
                "ORACLE_CONNECTION": "o:1521/XE",
            },
        )

        assert config["mysql"]["port"] == 3306
        assert config["postgresql"]["host"] == "pg"
        assert config["sqlite"]["path"] == "/data/p.db"
        assert config["oracle"]["dsn"] == "o:1521/XE"

    def test_bad_number(self):
        """
        Test that a non-numeric port is rejected naming the variable.
        """
        with pytest.raises(ValueError, match="POSTGRES_PORT"):
            apply_env_overrides(get_default_config(), {"POSTGRES_PORT": "fifty"})

    @pytest.mark.parametrize("value, expected", [("1", True), (" 1 ", True), ("0", False), ("yes", False)])
    def test_is_debug(self, value: str, expected: bool):
        """
        Test that only `MDB_DEBUG=1` turns on debug mode.

        Args:
            value: The value of `MDB_DEBUG`.
            expected: Whether debug mode is expected.
        """
        assert is_debug({"MDB_DEBUG": value}) is expected

    def test_debug_forces_debug_logging(self):
        """
        Test that debug mode overrides the configured log level.
        """
        config = get_default_config()
        apply_env_overrides(config, {"MDB_DEBUG": "1", "MDB_LOG_LEVEL": "ERROR"})
        assert config["server"]["log_level"] == "DEBUG"


class TestGetConfig:
    """Tests for resolving the full configuration."""

    def test_file_then_environment(self, tmp_path, clean_environ: FixtureModification):
        """
        Test that the environment wins over the file and the file wins over the defaults.

        Args:
            tmp_path: A built in pytest fixture providing a unique temporary directory.
            clean_environ: Removes MDB-related variables from the environment.
        """
        write_app_yaml(str(tmp_path), {"mysql": {"host": "from-file", "port": 4000}})

        config = get_config(str(tmp_path), {"MYSQL_PORT": "5000"})

        assert config["mysql"]["host"] == "from-file"
        assert config["mysql"]["port"] == 5000
        assert config["mysql"]["user"] == "mdb_user"

    def test_explicit_missing_path(self, tmp_path):
        """
        Test that naming a location without a config file is an error.

        Args:
            tmp_path: A built in pytest fixture providing a unique temporary directory.
        """
        with pytest.raises(ValueError, match="Cannot find an MDB config file"):
            get_config(os.path.join(str(tmp_path), "nowhere"), {})

    def test_no_file_uses_defaults(self, tmp_path, monkeypatch: pytest.MonkeyPatch):
        """
        Test that running without any config file falls back to the defaults.

        Args:
            tmp_path: A built in pytest fixture providing a unique temporary directory.
            monkeypatch: A built in pytest fixture for isolating the search paths.
        """
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("mdb.config.configfile.MDB_HOME", os.path.join(str(tmp_path), "home"))

        config = load_app_config(environ={})

        assert config.server.port == 3001
        assert config.mongodb.database == "postal_codes_db"


class TestCreateTemplateConfig:
    """Tests for writing the template app.yaml."""

    def test_template_matches_defaults(self, tmp_path):
        """
        Test that the written template loads back to the built-in defaults.

        Args:
            tmp_path: A built in pytest fixture providing a unique temporary directory.
        """
        output_dir = os.path.join(str(tmp_path), "conf")

        path = create_template_config(output_dir)

        assert path == os.path.join(output_dir, "app.yaml")
        assert load_config(path) == DEFAULT_CONFIG

    def test_refuses_to_overwrite(self, tmp_path):
        """
        Test that an existing app.yaml is never overwritten.

        Args:
            tmp_path: A built in pytest fixture providing a unique temporary directory.
        """
        write_app_yaml(str(tmp_path), {"server": {"port": 1}})

        with pytest.raises(FileExistsError):
            create_template_config(str(tmp_path))
