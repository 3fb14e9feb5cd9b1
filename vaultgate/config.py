import logging
import os
import sys
from datetime import timedelta
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from vaultgate.domain.authorization.role import Role
from vaultgate.domain.secret.model import CacheConfiguration


class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Load settings from YAML file specified by VAULTGATE_CONFIG_FILE env var."""

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Get the value for a field from the YAML config."""
        yaml_data = self._load_yaml_config()
        field_value = yaml_data.get(field_name)
        return field_value, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return all settings from YAML file."""
        return self._load_yaml_config()

    def _load_yaml_config(self) -> dict[str, Any]:
        """Load config from YAML file if specified."""
        config_file = os.environ.get("VAULTGATE_CONFIG_FILE")
        if config_file:
            path = Path(config_file)
            if path.exists():
                return yaml.safe_load(path.read_text()) or {}
        return {}


class AuthorizationConfig(BaseModel):
    """Authorization configuration (nested in Config, uses env_nested_delimiter)."""

    role: str = "READER"  # Fixed current role, e.g. VAULTGATE_AUTHORIZATION__ROLE=ADMIN

    @field_validator("role")
    @classmethod
    def _known_role(cls, value: str) -> str:
        name = value.strip().upper()
        if name not in Role.__members__:
            raise ValueError(f"role must be one of {', '.join(Role.__members__)}")
        return name

    @property
    def current_role(self) -> Role:
        return Role[self.role]


class CacheConfig(BaseModel):
    """Secret cache configuration (nested in Config, uses env_nested_delimiter)."""

    duration_seconds: float = Field(default=300.0, gt=0)

    def to_cache_configuration(self) -> CacheConfiguration:
        return CacheConfiguration(duration=timedelta(seconds=self.duration_seconds))


class LoggingConfig(BaseModel):
    """Logging configuration (nested in Config, uses env_nested_delimiter)."""

    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    @property
    def file(self) -> str | None:
        """Get log file path from VAULTGATE_LOG_FILE env var."""
        return os.environ.get("VAULTGATE_LOG_FILE")


class Config(BaseSettings):
    authorization: AuthorizationConfig = AuthorizationConfig()
    cache: CacheConfig = CacheConfig()
    logging: LoggingConfig = LoggingConfig()

    model_config = {
        "env_prefix": "VAULTGATE_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_nested_delimiter": "__",  # Allows VAULTGATE_AUTHORIZATION__ROLE override
    }

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to include YAML config.

        Priority (highest to lowest):
        1. init_settings - values passed to Config()
        2. env_settings - environment variables
        3. dotenv_settings - .env file
        4. yaml_settings - VAULTGATE_CONFIG_FILE yaml
        5. file_secret_settings - secrets from files
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


def configure_logging(config: LoggingConfig) -> None:
    """Configure Python logging based on config.

    Should be called early in application startup so every vaultgate logger
    picks up the configuration.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(config.level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(config.format, datefmt=config.date_format)

    if config.file:
        log_path = Path(config.file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_path)
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(config.level)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    # Reduce noise from third-party libraries
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    logging.debug("Logging configured: level=%s, file=%s", config.level, config.file)
