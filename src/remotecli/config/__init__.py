"""Configuration management for remotecli.

Loads and validates YAML-based configuration with Pydantic models.
Supports environment variable overrides for client credentials.
"""

from remotecli.config.settings import Settings, build_authenticator, load_settings

__all__ = ["Settings", "build_authenticator", "load_settings"]
