"""
Zep MCP Test Suite - Configuration Tests
"""

import pytest
import yaml

from zepmcp.core.config import (
    ZepMCPConfig,
    ZepConfig,
    get_config,
    load_config,
    require_api_key,
    reset_config,
)
from zepmcp.core.exceptions import ConfigurationError, MissingCredentialError


@pytest.fixture
def sample_config_path(tmp_path):
    """Create a temporary config.yaml."""
    config_data = {
        "zepmcp": {
            "zep": {"base_url": "https://zep.example.com/api/v2", "timeout_seconds": 30},
            "mcp": {"transport": "sse", "host": "0.0.0.0", "port": 9000},
            "security": {"cors_origins": ["https://app.example.com"]},
            "observability": {"log_level": "DEBUG"},
        }
    }
    path = tmp_path / "config.yaml"
    path.write_text(yaml.dump(config_data))
    return path


class TestLoadConfig:
    def test_defaults_without_file(self):
        config = load_config()
        assert config.zep.base_url == "https://api.getzep.com/api/v2"
        assert config.zep.timeout_seconds == 15
        assert config.zep.api_key is None
        assert config.mcp.transport == "stdio"
        assert config.mcp.server_name == "zep-poke-mcp-v2"
        assert config.mcp.server_version == "1.0.0"
        assert config.security.cors_origins == ["*"]

    def test_values_from_yaml(self, sample_config_path):
        config = load_config(sample_config_path)
        assert config.zep.base_url == "https://zep.example.com/api/v2"
        assert config.zep.timeout_seconds == 30
        assert config.mcp.transport == "sse"
        assert config.mcp.host == "0.0.0.0"
        assert config.mcp.port == 9000
        assert config.security.cors_origins == ["https://app.example.com"]
        assert config.observability.log_level == "DEBUG"

    def test_local_config_yaml_is_discovered(self, sample_config_path):
        # The autouse fixture chdirs into tmp_path, where the file lives.
        config = load_config()
        assert config.mcp.port == 9000

    def test_env_overrides_yaml(self, sample_config_path, monkeypatch):
        monkeypatch.setenv("ZEPMCP_PORT", "9100")
        monkeypatch.setenv("ZEPMCP_TRANSPORT", "stdio")
        monkeypatch.setenv("ZEPMCP_CORS_ORIGINS", "https://a.example, https://b.example")
        config = load_config(sample_config_path)
        assert config.mcp.port == 9100
        assert config.mcp.transport == "stdio"
        assert config.security.cors_origins == ["https://a.example", "https://b.example"]

    def test_api_key_read_from_environment(self, monkeypatch):
        monkeypatch.setenv("ZEPAPIKEY", "z_secret")
        assert load_config().zep.api_key == "z_secret"

    def test_empty_env_key_falls_back_to_yaml(self, tmp_path, monkeypatch):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.dump({"zepmcp": {"zep": {"api_key": "z_from_yaml"}}}))
        monkeypatch.setenv("ZEPAPIKEY", "")
        assert load_config(path).zep.api_key == "z_from_yaml"

    def test_env_key_wins_over_yaml(self, tmp_path, monkeypatch):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.dump({"zepmcp": {"zep": {"api_key": "z_from_yaml"}}}))
        monkeypatch.setenv("ZEPAPIKEY", "z_from_env")
        assert load_config(path).zep.api_key == "z_from_env"

    def test_unknown_transport_rejected(self, monkeypatch):
        monkeypatch.setenv("ZEPMCP_TRANSPORT", "carrier-pigeon")
        with pytest.raises(ConfigurationError, match="mcp.transport"):
            load_config()

    def test_non_integer_port_rejected(self, monkeypatch):
        monkeypatch.setenv("ZEPMCP_PORT", "eighty")
        with pytest.raises(ConfigurationError, match="ZEPMCP_PORT"):
            load_config()

    def test_non_positive_timeout_rejected(self, monkeypatch):
        monkeypatch.setenv("ZEPMCP_ZEP_TIMEOUT_SECONDS", "0")
        with pytest.raises(ConfigurationError, match="timeout_seconds"):
            load_config()


class TestSingleton:
    def test_get_config_caches(self):
        assert get_config() is get_config()

    def test_reset_config_reloads(self, monkeypatch):
        first = get_config()
        reset_config()
        monkeypatch.setenv("ZEPMCP_PORT", "8999")
        second = get_config()
        assert first is not second
        assert second.mcp.port == 8999


class TestRequireApiKey:
    def test_returns_stripped_key(self):
        config = ZepMCPConfig(zep=ZepConfig(api_key="  z_key  "))
        assert require_api_key(config) == "z_key"

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_missing_or_blank_key_fails(self, value):
        config = ZepMCPConfig(zep=ZepConfig(api_key=value))
        with pytest.raises(MissingCredentialError) as exc_info:
            require_api_key(config)
        assert "ZEPAPIKEY environment variable is required" in str(exc_info.value)
