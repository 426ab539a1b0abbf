"""
Zep MCP Configuration System
============================
Centralized, validated configuration with environment variable overrides.
"""

import os
from pathlib import Path
from typing import Optional
from dataclasses import dataclass, field

import yaml

from zepmcp.core.exceptions import ConfigurationError, MissingCredentialError

API_KEY_ENV_VAR = "ZEPAPIKEY"
SUPPORTED_TRANSPORTS = ("stdio", "sse")


@dataclass(frozen=True)
class ZepConfig:
    api_key: Optional[str] = None
    base_url: str = "https://api.getzep.com/api/v2"
    timeout_seconds: int = 15


@dataclass(frozen=True)
class MCPConfig:
    server_name: str = "zep-poke-mcp-v2"
    server_version: str = "1.0.0"
    transport: str = "stdio"
    host: str = "127.0.0.1"
    port: int = 8110
    sse_path: str = "/sse"
    messages_path: str = "/mcp/"


@dataclass(frozen=True)
class SecurityConfig:
    cors_origins: list[str] = field(default_factory=lambda: ["*"])


@dataclass(frozen=True)
class ObservabilityConfig:
    log_level: str = "INFO"
    json_logs: bool = False


@dataclass(frozen=True)
class ZepMCPConfig:
    """Root configuration for the adapter."""

    zep: ZepConfig = field(default_factory=ZepConfig)
    mcp: MCPConfig = field(default_factory=MCPConfig)
    security: SecurityConfig = field(default_factory=SecurityConfig)
    observability: ObservabilityConfig = field(default_factory=ObservabilityConfig)


def _env_override(key: str, default):
    """Check for ZEPMCP_<KEY> environment variable override."""
    env_key = f"ZEPMCP_{key.upper()}"
    val = os.environ.get(env_key)
    if val is None:
        return default
    # Type coercion based on the default's type
    if isinstance(default, bool):
        return val.lower() in ("true", "1", "yes")
    if isinstance(default, int):
        try:
            return int(val)
        except ValueError as exc:
            raise ConfigurationError(
                config_key=env_key, reason=f"expected an integer, got {val!r}"
            ) from exc
    return val


def _require_positive(key: str, value: int) -> int:
    if not isinstance(value, int) or value <= 0:
        raise ConfigurationError(
            config_key=key, reason=f"must be a positive integer, got {value!r}"
        )
    return value


def load_config(path: Optional[Path] = None) -> ZepMCPConfig:
    """
    Load configuration from YAML file with environment variable overrides.

    Priority: ENV > YAML > defaults.

    Args:
        path: Path to config.yaml. If None, searches ./config.yaml.

    Returns:
        Validated ZepMCPConfig instance.

    Raises:
        ConfigurationError: If a value is out of range or the transport is unknown.
    """
    if path is None:
        candidate = Path("config.yaml")
        if candidate.exists():
            path = candidate

    raw = {}
    if path is not None and path.exists():
        with open(path) as f:
            loaded = yaml.safe_load(f) or {}
            raw = loaded.get("zepmcp") or {}

    # Build zep config; the credential lives under its own unprefixed name
    zep_raw = raw.get("zep") or {}
    zep = ZepConfig(
        api_key=os.environ.get(API_KEY_ENV_VAR) or zep_raw.get("api_key"),
        base_url=_env_override(
            "ZEP_BASE_URL", zep_raw.get("base_url", "https://api.getzep.com/api/v2")
        ),
        timeout_seconds=_require_positive(
            "zep.timeout_seconds",
            _env_override("ZEP_TIMEOUT_SECONDS", zep_raw.get("timeout_seconds", 15)),
        ),
    )

    # Build MCP config
    mcp_raw = raw.get("mcp") or {}
    transport = _env_override("TRANSPORT", mcp_raw.get("transport", "stdio"))
    if transport not in SUPPORTED_TRANSPORTS:
        raise ConfigurationError(
            config_key="mcp.transport",
            reason=f"must be one of {', '.join(SUPPORTED_TRANSPORTS)}, got {transport!r}",
        )
    mcp = MCPConfig(
        server_name=mcp_raw.get("server_name", "zep-poke-mcp-v2"),
        server_version=mcp_raw.get("server_version", "1.0.0"),
        transport=transport,
        host=_env_override("HOST", mcp_raw.get("host", "127.0.0.1")),
        port=_require_positive("mcp.port", _env_override("PORT", mcp_raw.get("port", 8110))),
        sse_path=mcp_raw.get("sse_path", "/sse"),
        messages_path=mcp_raw.get("messages_path", "/mcp/"),
    )

    # Parse CORS origins from env (comma-separated) or config
    sec_raw = raw.get("security") or {}
    cors_env = os.environ.get("ZEPMCP_CORS_ORIGINS")
    if cors_env:
        cors_origins = [o.strip() for o in cors_env.split(",") if o.strip()]
    else:
        cors_origins = sec_raw.get("cors_origins", ["*"])
    security = SecurityConfig(cors_origins=cors_origins)

    obs_raw = raw.get("observability") or {}
    observability = ObservabilityConfig(
        log_level=_env_override("LOG_LEVEL", obs_raw.get("log_level", "INFO")),
        json_logs=_env_override("JSON_LOGS", obs_raw.get("json_logs", False)),
    )

    return ZepMCPConfig(
        zep=zep,
        mcp=mcp,
        security=security,
        observability=observability,
    )


def require_api_key(config: ZepMCPConfig) -> str:
    """
    Return the validated Zep API key or raise MissingCredentialError.

    Blank values count as missing.
    """
    api_key = (config.zep.api_key or "").strip()
    if not api_key:
        raise MissingCredentialError(API_KEY_ENV_VAR)
    return api_key


# Module-level singleton (lazy-loaded)
_CONFIG: Optional[ZepMCPConfig] = None


def get_config() -> ZepMCPConfig:
    """Get or initialize the global config singleton."""
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = load_config()
    return _CONFIG


def reset_config():
    """Reset the global config singleton (useful for testing)."""
    global _CONFIG
    _CONFIG = None
