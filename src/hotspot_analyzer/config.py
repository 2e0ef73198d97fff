"""
Configuration for capture scanning and the command line.

Configuration files may be JSON (``.json``) or YAML (``.yaml``/``.yml``).
"""

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .core.models import ConfigurationError

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ('text', 'json')
LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR')


@dataclass
class ScanConfig:
    """Options controlling how captures are scanned and reported."""
    max_packets: Optional[int] = None
    include_probe_responses: bool = True
    passpoint_only: bool = False
    skip_malformed: bool = True
    output_format: str = 'text'
    log_level: str = 'INFO'

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Check value ranges; raises ConfigurationError."""
        if self.max_packets is not None:
            if not isinstance(self.max_packets, int) or isinstance(self.max_packets, bool) \
                    or self.max_packets <= 0:
                raise ConfigurationError(f"max_packets must be a positive integer: {self.max_packets!r}")
        for name in ('include_probe_responses', 'passpoint_only', 'skip_malformed'):
            if not isinstance(getattr(self, name), bool):
                raise ConfigurationError(f"{name} must be true or false")
        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigurationError(f"Unknown output format: {self.output_format!r}")
        if str(self.log_level).upper() not in LOG_LEVELS:
            raise ConfigurationError(f"Invalid log level: {self.log_level!r}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ScanConfig':
        if not isinstance(data, dict):
            raise ConfigurationError("Configuration must be a mapping")
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def merged(self, **overrides: Any) -> 'ScanConfig':
        """Return a copy with non-None overrides applied."""
        data = self.to_dict()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return ScanConfig.from_dict(data)


def load_config(path: str) -> ScanConfig:
    """
    Load a ScanConfig from a JSON or YAML file.

    Args:
        path: Configuration file path

    Returns:
        Parsed configuration

    Raises:
        ConfigurationError: If the file cannot be read or holds bad values
    """
    config_path = Path(path)
    try:
        text = config_path.read_text()
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}") from e

    try:
        if config_path.suffix.lower() in ('.yaml', '.yml'):
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (yaml.YAMLError, ValueError) as e:
        raise ConfigurationError(f"Cannot parse config file {path}: {e}") from e

    logger.debug(f"Loaded configuration from {path}")
    return ScanConfig.from_dict(data or {})
