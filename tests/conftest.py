"""
Pytest configuration and fixtures
"""

import pytest
from unittest.mock import Mock

from unraid_cli.config import Config, ConfigManager
from unraid_cli.containers import Container


@pytest.fixture
def config_path(tmp_path):
    """Config file location inside a temporary directory"""
    return tmp_path / "unraid" / "config.yaml"


@pytest.fixture
def config_manager(config_path) -> ConfigManager:
    return ConfigManager(str(config_path))


@pytest.fixture
def sample_config() -> Config:
    """Two servers with 'tower' as default"""
    config = Config()
    config.add_server("tower", "https://192.168.1.100", "key-tower")
    config.add_server("backup", "https://192.168.1.101", "key-backup")
    config.default = "tower"
    return config


@pytest.fixture
def containers():
    return [
        Container.from_dict({
            "id": "id-plex",
            "names": ["plex"],
            "image": "plexinc/pms-docker:latest",
            "state": "RUNNING",
            "status": "Up 3 days",
            "ports": [{"ip": "0.0.0.0", "privatePort": 32400, "publicPort": 32400, "type": "TCP"}],
        }),
        Container.from_dict({
            "id": "id-sonarr",
            "names": ["sonarr"],
            "image": "linuxserver/sonarr",
            "state": "EXITED",
            "status": "Exited (0) 2 hours ago",
            "ports": [],
        }),
        Container.from_dict({
            "id": "id-radarr",
            "names": ["/radarr"],
            "image": "linuxserver/radarr",
            "state": "RUNNING",
            "status": "Up 5 minutes",
            "ports": [],
        }),
    ]


@pytest.fixture
def mock_client(containers):
    """API client double returning the sample containers"""
    client = Mock()
    client.list_containers.return_value = containers
    return client
