"""Configuration management for the CLI"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Any, Mapping

import click
import yaml

from .exceptions import ConfigurationError, ConfigFileError, ConfigParseError, NotFoundError

logger = logging.getLogger(__name__)

APP_NAME = 'unraid'
CONFIG_FILENAME = 'config.yaml'

ENV_SERVER = 'UNRAID_SERVER'
ENV_URL = 'UNRAID_URL'
ENV_API_KEY = 'UNRAID_API_KEY'


def default_config_path() -> Path:
    """Per-user config file in the platform's application config directory"""
    return Path(click.get_app_dir(APP_NAME)) / CONFIG_FILENAME


@dataclass
class ServerConfig:
    """Connection settings for a single server"""
    url: str
    api_key: str


@dataclass
class Config:
    """Main configuration structure"""
    default: Optional[str] = None
    servers: Dict[str, ServerConfig] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary for YAML serialization"""
        return {
            'default': self.default,
            'servers': {
                name: {
                    'url': server.url,
                    'api_key': server.api_key
                }
                for name, server in self.servers.items()
            }
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """Create config from dictionary, ignoring unknown keys"""
        servers = {}
        for name, server_data in (data.get('servers') or {}).items():
            server_data = server_data or {}
            servers[str(name)] = ServerConfig(
                url=server_data.get('url') or '',
                api_key=server_data.get('api_key') or ''
            )

        return cls(
            default=data.get('default'),
            servers=servers
        )

    def get_server(self, name: Optional[str] = None) -> Optional[ServerConfig]:
        """Get a server by name, falling back to the default server"""
        server_name = name or self.default
        if not server_name:
            return None
        return self.servers.get(server_name)

    def add_server(self, name: str, url: str, api_key: str):
        """Add or replace a server"""
        self.servers[name] = ServerConfig(url=url, api_key=api_key)

    def remove_server(self, name: str) -> bool:
        """Remove a server, returning whether it existed"""
        removed = self.servers.pop(name, None) is not None

        if self.default == name:
            self.default = None

        return removed

    def set_default(self, name: str):
        """Set the default server"""
        if name not in self.servers:
            raise NotFoundError(
                'Server', name,
                f"Server '{name}' not found in configuration"
            )
        self.default = name


class ConfigManager:
    """Manages configuration file operations"""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = Path(config_path) if config_path else default_config_path()
        self.config_dir = self.config_path.parent

    def ensure_config_dir(self):
        """Ensure configuration directory exists"""
        self.config_dir.mkdir(parents=True, exist_ok=True)

    def load(self) -> Config:
        """Load configuration from file; a missing file is an empty config"""
        if not self.config_path.exists():
            logger.debug("Config file %s not found, using empty config", self.config_path)
            return Config()

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except OSError as e:
            raise ConfigFileError(
                f"Failed to read config file: {self.config_path}: {e}",
                str(self.config_path)
            ) from e
        except UnicodeDecodeError as e:
            raise ConfigParseError(
                f"Failed to parse config file: {self.config_path}: not valid UTF-8: {e}",
                str(self.config_path)
            ) from e

        try:
            data = yaml.safe_load(content) or {}
        except yaml.YAMLError as e:
            raise ConfigParseError(
                f"Failed to parse config file: {self.config_path}: {e}",
                str(self.config_path)
            ) from e

        if not isinstance(data, dict):
            raise ConfigParseError(
                f"Failed to parse config file: {self.config_path}: expected a mapping",
                str(self.config_path)
            )

        try:
            return Config.from_dict(data)
        except (AttributeError, TypeError) as e:
            raise ConfigParseError(
                f"Failed to parse config file: {self.config_path}: {e}",
                str(self.config_path)
            ) from e

    def save(self, config: Config):
        """Save configuration to file"""
        content = yaml.safe_dump(config.to_dict(), default_flow_style=False, sort_keys=False)

        try:
            self.ensure_config_dir()
            with open(self.config_path, 'w', encoding='utf-8') as f:
                f.write(content)
        except OSError as e:
            raise ConfigFileError(
                f"Failed to write config file: {self.config_path}: {e}",
                str(self.config_path)
            ) from e

        logger.debug("Saved config with %d server(s) to %s", len(config.servers), self.config_path)


@dataclass
class ResolvedConfig:
    """Server URL and API key selected for one invocation"""
    url: str
    api_key: str

    @classmethod
    def resolve(
        cls,
        cli_server: Optional[str] = None,
        cli_url: Optional[str] = None,
        cli_api_key: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
        config_manager: Optional[ConfigManager] = None,
    ) -> 'ResolvedConfig':
        """Resolve the endpoint from CLI args, environment variables and config file.

        Priority: CLI url+key > UNRAID_URL+UNRAID_API_KEY > config file. A CLI
        url or key given on its own overrides that one field of whichever
        source wins.
        """
        if cli_url and cli_api_key:
            logger.debug("Using URL and API key from command line")
            return cls(url=cli_url, api_key=cli_api_key)

        if environ is None:
            environ = os.environ

        env_url = environ.get(ENV_URL) or None
        env_api_key = environ.get(ENV_API_KEY) or None
        env_server = environ.get(ENV_SERVER) or None

        if env_url and env_api_key:
            logger.debug("Using URL and API key from %s/%s", ENV_URL, ENV_API_KEY)
            return cls(url=cli_url or env_url, api_key=cli_api_key or env_api_key)

        config = (config_manager or ConfigManager()).load()
        server_name = cli_server or env_server

        server = config.get_server(server_name)
        if server is not None:
            logger.debug("Using server '%s' from config file", server_name or config.default)
            return cls(url=cli_url or server.url, api_key=cli_api_key or server.api_key)

        raise ConfigurationError(
            "No server configured. Use 'unraid config add <name>' to add a server, "
            f"or set {ENV_URL} and {ENV_API_KEY} environment variables.",
            {"server": server_name}
        )
