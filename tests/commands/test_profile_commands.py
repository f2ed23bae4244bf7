"""Tests for profile commands."""

from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from azopsman.commands.profile import app
from azopsman.utils.config import Config

runner = CliRunner()


@pytest.fixture
def config(tmp_path):
    config = Config()
    config._config_dir = tmp_path / ".azopsman"
    config._config_file_yaml = tmp_path / ".azopsman" / "config.yaml"
    with patch("azopsman.commands.profile.config", config):
        yield config


def test_list_without_profiles(config):
    result = runner.invoke(app, ["list"])

    assert result.exit_code == 0
    assert "No profiles configured" in result.output


def test_first_profile_becomes_default(config):
    result = runner.invoke(app, ["add", "dev", "--subscription", "sub-1", "--tenant", "tenant-1"])

    assert result.exit_code == 0
    assert "added and set as default" in result.output
    assert config.get("profiles.dev") == {"subscription_id": "sub-1", "tenant_id": "tenant-1"}
    assert config.get("default_profile") == "dev"


def test_add_second_profile_keeps_default(config):
    runner.invoke(app, ["add", "dev", "-s", "sub-1"])

    result = runner.invoke(app, ["add", "prod", "-s", "sub-2"])

    assert result.exit_code == 0
    assert config.get("default_profile") == "dev"


def test_add_existing_profile_is_refused(config):
    runner.invoke(app, ["add", "dev", "-s", "sub-1"])

    result = runner.invoke(app, ["add", "dev", "-s", "sub-9"])

    assert "already exists" in result.output
    assert config.get("profiles.dev.subscription_id") == "sub-1"


def test_list_shows_profiles(config):
    runner.invoke(app, ["add", "dev", "-s", "sub-1"])

    result = runner.invoke(app, ["list"])

    assert result.exit_code == 0
    assert "dev" in result.output
    assert "sub-1" in result.output


def test_update_profile(config):
    runner.invoke(app, ["add", "dev", "-s", "sub-1"])
    runner.invoke(app, ["add", "prod", "-s", "sub-2"])

    result = runner.invoke(app, ["update", "prod", "-s", "sub-3", "--default"])

    assert result.exit_code == 0
    assert config.get("profiles.prod.subscription_id") == "sub-3"
    assert config.get("default_profile") == "prod"


def test_update_missing_profile(config):
    result = runner.invoke(app, ["update", "ghost", "-s", "sub-1"])

    assert result.exit_code == 1
    assert "does not exist" in result.output


def test_remove_default_profile_moves_default(config):
    runner.invoke(app, ["add", "dev", "-s", "sub-1"])
    runner.invoke(app, ["add", "prod", "-s", "sub-2"])

    result = runner.invoke(app, ["remove", "dev", "--force"])

    assert result.exit_code == 0
    assert config.get("profiles") == {"prod": {"subscription_id": "sub-2"}}
    assert config.get("default_profile") == "prod"


def test_remove_last_profile_clears_default(config):
    runner.invoke(app, ["add", "dev", "-s", "sub-1"])

    result = runner.invoke(app, ["remove", "dev"], input="y\n")

    assert result.exit_code == 0
    assert config.get("default_profile") is None


def test_remove_cancelled(config):
    runner.invoke(app, ["add", "dev", "-s", "sub-1"])

    result = runner.invoke(app, ["remove", "dev"], input="n\n")

    assert "Operation cancelled." in result.output
    assert config.get("profiles.dev.subscription_id") == "sub-1"


def test_set_default(config):
    runner.invoke(app, ["add", "dev", "-s", "sub-1"])
    runner.invoke(app, ["add", "prod", "-s", "sub-2"])

    result = runner.invoke(app, ["set-default", "prod"])

    assert result.exit_code == 0
    assert config.get("default_profile") == "prod"


def test_set_default_missing_profile(config):
    result = runner.invoke(app, ["set-default", "ghost"])

    assert result.exit_code == 1
