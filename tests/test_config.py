#!/usr/bin/env python3
"""
Configuration Test Suite

Tests configuration loading, schema validation and template generation.
"""

import pytest
import yaml

from rbac_preflight.libs.core.config import ConfigManager
from rbac_preflight.libs.core.constants import FileConstants
from rbac_preflight.libs.core.exceptions import ConfigError

VALID_CONFIG = """
cluster:
  url: https://api.example.com:6443
  token: ""
  skip_tls: true
  request_timeout: 10
preflight:
  namespace: apps
  action: upgrade
  manifest: ./deploy.yaml
global:
  debug: false
"""


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(VALID_CONFIG)
    return path


def test_load_valid_config(config_file):
    manager = ConfigManager()

    data = manager.load_config(str(config_file))

    assert data['preflight']['action'] == "upgrade"
    assert manager.get_value('cluster.request_timeout') == 10
    assert manager.get_value('cluster.skip_tls') is True
    assert manager.get_section('global') == {'debug': False}


def test_get_value_defaults(config_file):
    manager = ConfigManager()
    manager.load_config(str(config_file))

    assert manager.get_value('cluster.missing', 'fallback') == 'fallback'
    assert manager.get_value('preflight.namespace.nested', 'x') == 'x'
    assert manager.get_section('unknown') == {}


def test_missing_file_raises(tmp_path):
    with pytest.raises(ConfigError, match="Configuration file not found"):
        ConfigManager().load_config(str(tmp_path / "absent.yaml"))


def test_directory_path_raises(tmp_path):
    with pytest.raises(ConfigError, match="not a file"):
        ConfigManager().load_config(str(tmp_path))


def test_invalid_yaml_raises(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("cluster: [unclosed\n")

    with pytest.raises(ConfigError, match="Invalid YAML"):
        ConfigManager().load_config(str(path))


@pytest.mark.parametrize("content, message", [
    ("preflight:\n  action: install\n", "config.preflight.action must be one of"),
    ("cluster:\n  request_timeout: fast\n", "config.cluster.request_timeout must be a int"),
    ("cluster:\n  request_timeout: true\n", "config.cluster.request_timeout must be a int"),
    ("cluster:\n  skip_tls: maybe\n", "config.cluster.skip_tls must be a bool"),
    ("preflight: []\n", "config.preflight must be a dict"),
    ("- a\n- b\n", "Configuration must be a dictionary"),
])
def test_schema_violations(tmp_path, content, message):
    path = tmp_path / "config.yaml"
    path.write_text(content)

    with pytest.raises(ConfigError, match=message):
        ConfigManager().load_config(str(path))


def test_empty_file_is_an_empty_config(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")

    assert ConfigManager().load_config(str(path)) == {}


def test_template_content_round_trips_through_loader(tmp_path):
    manager = ConfigManager()
    content = manager.get_config_template_content()

    assert content.startswith("# RBAC Preflight Configuration File")
    data = yaml.safe_load(content)
    assert set(data) == {'cluster', 'preflight', 'global'}
    assert data['preflight']['action'] == "create"

    path = tmp_path / "template.yaml"
    path.write_text(content)
    ConfigManager().load_config(str(path))


def test_generate_template_file(tmp_path):
    output_dir = tmp_path / "nested" / "config"

    written = ConfigManager().generate_config_template(str(output_dir))

    assert written == str(output_dir / FileConstants.DEFAULT_CONFIG_FILE)
    assert (output_dir / FileConstants.DEFAULT_CONFIG_FILE).read_text().startswith("#")
