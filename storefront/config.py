import logging
import os
import sys
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, field_validator, model_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource
from typing_extensions import Self


class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Load settings from YAML file specified by STOREFRONT_CONFIG_FILE env var."""

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        yaml_data = self._load_yaml_config()
        field_value = yaml_data.get(field_name)
        return field_value, field_name, False

    def __call__(self) -> dict[str, Any]:
        return self._load_yaml_config()

    def _load_yaml_config(self) -> dict[str, Any]:
        config_file = os.environ.get("STOREFRONT_CONFIG_FILE")
        if config_file:
            path = Path(config_file)
            if path.exists():
                return yaml.safe_load(path.read_text()) or {}
        return {}


class Server(BaseModel):
    """Server configuration (nested in Config, uses env_nested_delimiter)."""

    name: str = "Storefront"
    version: str = "0.1.0"
    description: str = "Customer identity resolution for the storefront API"


class DatabaseConfig(BaseModel):
    """Database configuration (nested in Config, uses env_nested_delimiter)."""

    url: str = "sqlite+aiosqlite:///~/.storefront/storefront.db"
    echo: bool = False
    auto_migrate: bool = True  # create tables on startup; use `storefront migrate` in production


class LoggingConfig(BaseModel):
    """Logging configuration (nested in Config, uses env_nested_delimiter)."""

    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    @property
    def file(self) -> str | None:
        """Get log file path from STOREFRONT_LOG_FILE env var."""
        return os.environ.get("STOREFRONT_LOG_FILE")


# =============================================================================
# Authentication Configuration
# =============================================================================


class JwtConfig(BaseModel):
    """JWT configuration shared by session access tokens and customer tokens."""

    secret: str = ""  # Must be set when customer token resolution is enabled
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    customer_token_expire_days: int = 30


class CustomerTokenConfig(BaseModel):
    """Where the customer token is read from on incoming requests.

    The header is checked first; the query parameter is only consulted when
    the header is absent. A name left unset never matches anything.
    """

    enabled: bool = True  # False swaps in session-only customer resolution
    header: str | None = None
    param: str | None = None

    @field_validator("header", "param", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class CrossAppConfig(BaseModel):
    """Trust delegation from the admin application (customer service reps)."""

    enabled: bool = False
    header: str | None = None  # Header carrying the admin-issued JWT
    secret: str = ""
    algorithm: str = "HS256"
    audience: str = "admin"
    csr_permission: str = "PERMISSION_CSR"

    @model_validator(mode="after")
    def require_header_and_secret(self) -> Self:
        if self.enabled and not (self.header and self.secret):
            raise ValueError("auth.cross_app requires both header and secret when enabled")
        return self


class AuthConfig(BaseModel):
    """Authentication configuration."""

    jwt: JwtConfig = JwtConfig()
    customer_token: CustomerTokenConfig = CustomerTokenConfig()
    cross_app: CrossAppConfig = CrossAppConfig()


class Config(BaseSettings):
    server: Server = Server()
    database: DatabaseConfig = DatabaseConfig()
    logging: LoggingConfig = LoggingConfig()
    auth: AuthConfig = AuthConfig()

    model_config = {
        "env_prefix": "STOREFRONT_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_nested_delimiter": "__",  # Allows STOREFRONT_AUTH__JWT__SECRET override
    }

    @model_validator(mode="after")
    def require_jwt_secret(self) -> Self:
        """Fail at startup rather than issuing tokens signed with an empty key."""
        if self.auth.customer_token.enabled and not self.auth.jwt.secret:
            raise ValueError("auth.jwt.secret must be set when customer tokens are enabled")
        return self

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
        4. yaml_settings - STOREFRONT_CONFIG_FILE yaml
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

    Should be called early in application startup so all loggers pick up
    the configuration.
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
        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(config.level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
    else:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(config.level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    # Reduce noise from third-party libraries
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("alembic").setLevel(logging.INFO)

    logging.debug("Logging configured: level=%s, file=%s", config.level, config.file)
