"""Configuration management for remotecli.

Loads settings from a YAML configuration file with environment variable
overrides for client credentials. Supports .env files.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings

from remotecli.auth.token import AccessToken, TokenAuthenticator

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/remotecli.yaml")


class ServerConfig(BaseModel):
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080, ge=1, le=65535)
    execute_path: str = Field(default="/api/execute")
    max_command_length: int = Field(default=1024, gt=0)
    forwarded_ip_header: str | None = Field(
        default=None, description="e.g. X-Forwarded-For when behind a reverse proxy"
    )

    @field_validator("execute_path")
    @classmethod
    def _absolute_path(cls, v: str) -> str:
        if not v.startswith("/"):
            raise ValueError("execute_path must start with '/'")
        return v

    @field_validator("forwarded_ip_header", mode="before")
    @classmethod
    def _empty_to_none(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class TokenConfig(BaseModel):
    alias: str = Field(min_length=1)
    token_hash: str = Field(min_length=1, description="Argon2 hash, see 'remotecli keygen'")
    manager: bool = Field(default=False)


class AuthConfig(BaseModel):
    tokens: list[TokenConfig] = Field(default_factory=list)


class ClientConfig(BaseModel):
    base_url: str = Field(default="http://localhost:8080")
    execute_path: str = Field(default="/api/execute")
    timeout: float = Field(default=30.0, gt=0)
    alias: str = Field(default="")
    token: SecretStr = Field(default=SecretStr(""))


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")
    format: str = Field(
        default="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    file: str | None = Field(default=None)
    audit_file: str | None = Field(
        default=None, description="Separate file for command request records"
    )
    audit_format: str = Field(default="%(asctime)s %(message)s")


class Settings(BaseSettings):
    """Root configuration for remotecli.

    Loads from YAML file and supports environment variable overrides.
    Reads .env files automatically.
    """

    model_config = {
        "env_prefix": "REMOTECLI_",
        "env_nested_delimiter": "__",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    server: ServerConfig = Field(default_factory=ServerConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    client: ClientConfig = Field(default_factory=ClientConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_settings(config_path: Path | str | None = None) -> Settings:
    """Load settings from YAML + .env + environment variables.

    Priority: credential env vars > YAML file > REMOTECLI_* env vars > defaults
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
    _load_dotenv()

    yaml_data = {}
    if path.exists():
        with open(path) as f:
            yaml_data = yaml.safe_load(f) or {}
        logger.info("Loaded configuration from %s", path)
    else:
        logger.warning("Config file %s not found, using defaults + env vars", path)

    _apply_env_overrides(yaml_data)

    return Settings(**yaml_data)


def _load_dotenv() -> None:
    """Load .env file into os.environ if it exists. Set variables win."""
    env_path = Path(".env")
    if not env_path.exists():
        return
    with open(env_path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" in line:
                key, _, value = line.partition("=")
                key = key.strip()
                value = value.strip().strip("\"'")
                if not os.environ.get(key):
                    os.environ[key] = value


def _apply_env_overrides(yaml_data: dict) -> None:
    """Apply client credential overrides from unprefixed-style env vars."""
    url = os.environ.get("REMOTECLI_URL", "")
    alias = os.environ.get("REMOTECLI_ALIAS", "")
    token = os.environ.get("REMOTECLI_TOKEN", "")

    if not (url or alias or token):
        return

    client = yaml_data.setdefault("client", {})
    if url:
        client["base_url"] = url
    if alias:
        client["alias"] = alias
    if token:
        client["token"] = token


def build_authenticator(config: AuthConfig) -> TokenAuthenticator:
    """Create the token authenticator from the auth section."""
    if not config.tokens:
        logger.warning("No access tokens configured, every request will be rejected")
    return TokenAuthenticator(
        AccessToken(alias=t.alias, token_hash=t.token_hash, manager=t.manager)
        for t in config.tokens
    )
