"""Run configuration for the capacity reporter."""
from dataclasses import dataclass
from datetime import timedelta
from typing import Dict, Any, Optional
import logging

import yaml

from .errors import ConfigurationError
from .utils import parse_duration

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = timedelta(seconds=10)

# Keys accepted in a YAML config file
FILE_KEYS = {'cluster', 'thanos', 'timeout', 'per_query_timeout', 'disable_ssl', 'log_level'}

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


@dataclass
class ReporterConfig:
    """Settings for a single reporting run."""
    cluster: str = ""
    thanos_url: str = ""
    timeout: timedelta = DEFAULT_TIMEOUT
    per_query_timeout: bool = False
    disable_ssl: bool = False
    log_level: str = "WARNING"

    def validate(self) -> None:
        """Check that the required fields are set.

        Raises:
            ConfigurationError: If cluster or thanos URL is empty.
        """
        if not self.cluster or not self.thanos_url:
            raise ConfigurationError("cluster or thanos query url cannot be empty")


def load_config_file(config_path: str) -> Dict[str, Any]:
    """Load a YAML config file.

    Args:
        config_path: Path to the YAML file

    Returns:
        Mapping of config keys to values
    """
    try:
        with open(config_path, 'r') as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"failed to read config file {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"config file {config_path} must contain a mapping")

    unknown = sorted(set(data) - FILE_KEYS)
    if unknown:
        raise ConfigurationError(f"unknown keys in config file {config_path}: {unknown}")

    logger.debug(f"Loaded config file {config_path} with keys {sorted(data)}")
    return data


def _coerce_timeout(value: Any) -> timedelta:
    if isinstance(value, timedelta):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return timedelta(seconds=value)
    try:
        return parse_duration(str(value))
    except ValueError as e:
        raise ConfigurationError(str(e)) from e


def build_config(cluster: Optional[str] = None,
                 thanos: Optional[str] = None,
                 timeout: Optional[timedelta] = None,
                 per_query_timeout: Optional[bool] = None,
                 log_level: Optional[str] = None,
                 config_path: Optional[str] = None) -> ReporterConfig:
    """Merge a config file with command line values.

    Values passed explicitly take precedence over those in the file.
    """
    file_conf = load_config_file(config_path) if config_path else {}

    config = ReporterConfig(
        cluster=str(file_conf.get('cluster') or ""),
        thanos_url=str(file_conf.get('thanos') or ""),
        per_query_timeout=bool(file_conf.get('per_query_timeout', False)),
        disable_ssl=bool(file_conf.get('disable_ssl', False)),
        log_level=str(file_conf.get('log_level', "WARNING")).upper(),
    )
    if 'timeout' in file_conf:
        config.timeout = _coerce_timeout(file_conf['timeout'])

    if cluster is not None:
        config.cluster = cluster
    if thanos is not None:
        config.thanos_url = thanos
    if timeout is not None:
        config.timeout = timeout
    if per_query_timeout:
        config.per_query_timeout = True
    if log_level is not None:
        config.log_level = log_level.upper()

    if config.log_level not in LOG_LEVELS:
        raise ConfigurationError(f"invalid log level {config.log_level!r}")
    return config
