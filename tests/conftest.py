"""Shared pytest fixtures for filepathfilter tests."""
from pathlib import Path
from typing import Any, Dict

import pytest
import yaml

from filepathfilter.infrastructure import config_manager, logger


@pytest.fixture
def sample_config() -> Dict[str, Any]:
    """Provide a sample filepathfilter configuration."""
    return {
        "filepathfilter": {
            "filter": {
                "include": ["src/**", "*.md"],
                "exclude": ["*.pyc", "__pycache__"],
            },
            "logging": {
                "level": "DEBUG",
            },
        }
    }


@pytest.fixture
def config_file(tmp_path: Path, sample_config: Dict[str, Any]) -> Path:
    """Create a configuration file."""
    config_path = tmp_path / "filepathfilter.yaml"
    with open(config_path, "w") as f:
        yaml.dump(sample_config, f)
    return config_path


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset global logger and config instances between tests."""
    yield
    logger.set_global_logger(None)
    config_manager.set_global_config(None)
