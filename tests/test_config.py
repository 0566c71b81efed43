import os

import pytest

from dotfiles_bootstrap.config import DEFAULT_SHELL_CONFIG_HINT, load_bootstrap_config
from dotfiles_bootstrap.errors import ConfigError
from dotfiles_bootstrap.lib.env import PATHS, config_path_from_env


def test_missing_file_gives_defaults(tmp_path):
    cfg = load_bootstrap_config(str(tmp_path / "config.yaml"))

    assert cfg.source is None
    assert cfg.log_path == os.path.expanduser(PATHS.log_default)
    assert cfg.manifest_path is None
    assert cfg.prerequisite_failure_fatal is False
    assert cfg.require_network is True
    assert cfg.network_host == "google.com"
    assert cfg.cache_sudo is True
    assert cfg.shell_config_hint == DEFAULT_SHELL_CONFIG_HINT


def test_values_from_yaml(tmp_path):
    p = tmp_path / "config.yaml"
    p.write_text(
        "log_path: ~/bootstrap.log\n"
        "prerequisite_failure_fatal: true\n"
        "require_network: false\n"
        "cache_sudo: false\n"
        "network_host: example.com\n"
        "shell_config_hint: ~/.zprofile\n",
        encoding="utf-8",
    )

    cfg = load_bootstrap_config(str(p))

    assert cfg.source == str(p)
    assert cfg.log_path == os.path.expanduser("~/bootstrap.log")
    assert cfg.prerequisite_failure_fatal is True
    assert cfg.require_network is False
    assert cfg.cache_sudo is False
    assert cfg.network_host == "example.com"
    assert cfg.shell_config_hint == "~/.zprofile"


def test_non_boolean_flag_rejected(tmp_path):
    p = tmp_path / "config.yaml"
    p.write_text("cache_sudo: sometimes\n", encoding="utf-8")

    cfg = load_bootstrap_config(str(p))
    with pytest.raises(ConfigError, match="cache_sudo"):
        cfg.cache_sudo


@pytest.mark.parametrize(
    "name,body",
    [("config.yaml", "- a\n- b\n"), ("config.yaml", "a: [\n"), ("config.json", "{}")],
)
def test_invalid_files(tmp_path, name, body):
    p = tmp_path / name
    p.write_text(body, encoding="utf-8")

    with pytest.raises(ConfigError):
        load_bootstrap_config(str(p))


def test_config_path_env_override(monkeypatch):
    monkeypatch.setenv(PATHS.config_env_var, "/tmp/other.yaml")
    assert config_path_from_env() == "/tmp/other.yaml"

    monkeypatch.delenv(PATHS.config_env_var)
    assert config_path_from_env() == PATHS.config_default


def test_config_path_that_is_a_directory(tmp_path):
    d = tmp_path / "config.yaml"
    d.mkdir()

    with pytest.raises(ConfigError, match="cannot read config"):
        load_bootstrap_config(str(d))


def test_config_that_is_not_utf8(tmp_path):
    p = tmp_path / "config.yaml"
    p.write_bytes(b"log_path: \xff\xfe\n")

    with pytest.raises(ConfigError, match="cannot read config"):
        load_bootstrap_config(str(p))
