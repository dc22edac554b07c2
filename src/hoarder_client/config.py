"""Configuration loading for hoarder_client."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import tomli

logger = logging.getLogger("hoarder_client.config")


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"           # INFO or DEBUG
    output: str = "console"       # console, file, or both
    file: str = ""                # log file path; empty = timestamped file in log_dir
    log_dir: str = "logs"
    rotate: bool = True           # enable rotation
    max_size_mb: int = 10         # max file size before rotation
    backup_count: int = 5         # rotated files to keep


@dataclass
class ServerConfig:
    url: str = ""                 # any URL on the server; reduced to its origin
    api_key: str = ""
    auth_header: str = "bearer"   # bearer or x-api-key
    request_timeout: float = 30.0
    lock_timeout: float = 5.0     # seconds to wait on the credential store lock


@dataclass
class Config:
    server: ServerConfig = field(default_factory=ServerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _apply_env_overrides(config: Config) -> None:
    # Environment variable overrides for secrets
    _env_overrides = [
        ("HOARDER_BASE_URL", "server", "url"),
        ("HOARDER_API_KEY", "server", "api_key"),
    ]
    for env_var, section, field_name in _env_overrides:
        val = os.environ.get(env_var)
        if val:
            setattr(getattr(config, section), field_name, val)


def load_config(config_path: Path | None = None) -> Config:
    """Load configuration from TOML file, then apply environment overrides."""
    if config_path is None:
        # Look for config in standard locations
        candidates = [
            Path("config/config.toml"),
            Path.home() / ".config/hoarder-client/config.toml",
            Path("/etc/hoarder-client/config.toml"),
        ]
        for candidate in candidates:
            if candidate.exists():
                config_path = candidate
                break

    config = Config()

    if config_path is None or not config_path.exists():
        _apply_env_overrides(config)
        return config

    logger.debug("Loading config from %s", config_path)
    with open(config_path, "rb") as f:
        data = tomli.load(f)

    if "server" in data:
        srv = data["server"]
        config.server = ServerConfig(
            url=srv.get("url", ""),
            api_key=srv.get("api_key", ""),
            auth_header=srv.get("auth_header", "bearer"),
            request_timeout=float(srv.get("request_timeout", 30.0)),
            lock_timeout=float(srv.get("lock_timeout", 5.0)),
        )

    if "logging" in data:
        log = data["logging"]
        config.logging = LoggingConfig(
            level=log.get("level", "INFO"),
            output=log.get("output", "console"),
            file=log.get("file", ""),
            log_dir=log.get("log_dir", "logs"),
            rotate=log.get("rotate", True),
            max_size_mb=log.get("max_size_mb", 10),
            backup_count=log.get("backup_count", 5),
        )

    _apply_env_overrides(config)
    return config
