"""Configuration management for perseus.

Handles loading and validation of the YAML configuration file that tells
a mirror run where the Satis manifest lives and how to log.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

DEFAULT_CONFIG_PATH = "perseus.yaml"
DEFAULT_SATIS_FILE = "satis.json"
DEFAULT_FILE_MODE = 0o644


@dataclass
class SatisConfig:
    """Where and how the Satis manifest is written."""

    file: str = DEFAULT_SATIS_FILE
    file_mode: int = DEFAULT_FILE_MODE
    repository_type: str = "git"


@dataclass
class MirrorConfig:
    """Repositories mirrored as-is on every run."""

    repositories: List[str] = field(default_factory=list)


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "INFO"
    log_dir: str = "/var/log/perseus"
    file_logging: bool = False


@dataclass
class PerseusConfig:
    """Top-level configuration for perseus."""

    satis: SatisConfig = field(default_factory=SatisConfig)
    mirror: MirrorConfig = field(default_factory=MirrorConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def parse_file_mode(value: Union[int, str]) -> int:
    """Parse a permission value written as an int or an octal string.

    YAML 1.1 already turns ``0644`` into an int; ``"0644"`` and
    ``"0o644"`` arrive as strings.

    Raises:
        ValueError: If the value is not a valid permission mode
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid file mode: {value!r}")
    if isinstance(value, int):
        mode = value
    elif isinstance(value, str):
        text = value.strip().lower()
        if text.startswith("0o"):
            text = text[2:]
        try:
            mode = int(text, 8)
        except ValueError as e:
            raise ValueError(f"Invalid file mode: {value!r}") from e
    else:
        raise ValueError(f"Invalid file mode: {value!r}")

    if not 0 <= mode <= 0o7777:
        raise ValueError(f"File mode out of range: {value!r}")
    return mode


def parse_satis_config(satis_dict: Dict[str, Any]) -> SatisConfig:
    """Parse the ``satis`` section.

    Args:
        satis_dict: Satis configuration dictionary

    Returns:
        SatisConfig instance
    """
    return SatisConfig(
        file=satis_dict.get("file", DEFAULT_SATIS_FILE),
        file_mode=parse_file_mode(satis_dict.get("file_mode", DEFAULT_FILE_MODE)),
        repository_type=satis_dict.get("repository_type", "git"),
    )


def parse_mirror_config(mirror_dict: Dict[str, Any]) -> MirrorConfig:
    """Parse the ``mirror`` section.

    Args:
        mirror_dict: Mirror configuration dictionary

    Returns:
        MirrorConfig instance
    """
    repositories = mirror_dict.get("repositories") or []
    if not isinstance(repositories, list):
        raise TypeError(
            f"mirror.repositories must be a list, got {type(repositories).__name__}"
        )

    return MirrorConfig(
        repositories=[str(url) for url in repositories],
    )


def parse_logging_config(logging_dict: Dict[str, Any]) -> LoggingConfig:
    """Parse the ``logging`` section.

    Args:
        logging_dict: Logging configuration dictionary

    Returns:
        LoggingConfig instance
    """
    return LoggingConfig(
        level=logging_dict.get("level", "INFO"),
        log_dir=logging_dict.get("log_dir", "/var/log/perseus"),
        file_logging=logging_dict.get("file_logging", False),
    )


def parse_config(config_dict: Dict[str, Any]) -> PerseusConfig:
    """Parse the full configuration dictionary.

    Args:
        config_dict: Full configuration dictionary

    Returns:
        PerseusConfig instance
    """
    return PerseusConfig(
        satis=parse_satis_config(config_dict.get("satis") or {}),
        mirror=parse_mirror_config(config_dict.get("mirror") or {}),
        logging=parse_logging_config(config_dict.get("logging") or {}),
    )


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> Dict[str, Any]:
    """Load configuration from YAML file.

    Args:
        config_path: Path to configuration file

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is invalid YAML
        TypeError: If the document root is not a mapping
    """
    config_file = Path(config_path)

    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with config_file.open("r") as f:
        config = yaml.safe_load(f)

    if config is None:
        config = {}

    if not isinstance(config, dict):
        raise TypeError(
            f"Configuration root must be a mapping, got {type(config).__name__}"
        )

    return _expand_env_vars(config)


def _expand_env_vars(obj: Any) -> Any:
    """Recursively expand environment variables in configuration."""
    if isinstance(obj, dict):
        return {key: _expand_env_vars(value) for key, value in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(item) for item in obj]
    elif isinstance(obj, str):
        return os.path.expandvars(obj)
    else:
        return obj


def load_typed_config(config_path: str = DEFAULT_CONFIG_PATH) -> PerseusConfig:
    """Load and parse configuration into typed dataclass.

    Args:
        config_path: Path to configuration file

    Returns:
        PerseusConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is invalid YAML
    """
    return parse_config(load_config(config_path))
