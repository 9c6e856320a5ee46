"""
Configuration loader utility.
"""
import logging
import math
from dataclasses import dataclass
from typing import Dict, Optional

import yaml

from ..exceptions import ConfigurationError
from ..scenario.sweep_defaults import (DEFAULT_CURVE_PRICE_STEPS, DEFAULT_GRID_STEPS,
                                       DEFAULT_PORTFOLIO_STEPS)
from ..valuation.black_scholes import DEFAULT_EXPIRY_EPSILON

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = 'config/config.yaml'
DEFAULT_EXPORT_PATH = 'data/reports/'


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> Dict:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file

    Returns:
        Configuration dictionary (empty if the file cannot be read)
    """
    try:
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f) or {}
        if not isinstance(config, dict):
            logger.error(f"Config file {config_path} must contain a mapping, got {type(config).__name__}")
            return {}
        logger.info(f"Loaded configuration from {config_path}")
        return config
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Error loading config: {e}")
        return {}


def setup_logging(log_level: str = 'INFO', log_file: str = None):
    """
    Setup logging configuration.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional log file path
    """
    log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    handlers = [logging.StreamHandler()]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=log_format,
        handlers=handlers
    )

    logger.info(f"Logging configured at {log_level} level")


@dataclass
class EngineSettings:
    """Tunable engine parameters."""
    expiry_epsilon: float = DEFAULT_EXPIRY_EPSILON
    grid_steps: int = DEFAULT_GRID_STEPS
    curve_price_steps: int = DEFAULT_CURVE_PRICE_STEPS
    portfolio_steps: int = DEFAULT_PORTFOLIO_STEPS
    log_level: str = 'INFO'
    log_file: Optional[str] = None
    export_path: str = DEFAULT_EXPORT_PATH

    def __post_init__(self):
        if not isinstance(self.expiry_epsilon, (int, float)) or isinstance(self.expiry_epsilon, bool) \
                or not math.isfinite(self.expiry_epsilon) or self.expiry_epsilon < 0:
            raise ConfigurationError(f"expiry_epsilon must be a non-negative number, got {self.expiry_epsilon!r}")

        for name in ('grid_steps', 'curve_price_steps', 'portfolio_steps'):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                raise ConfigurationError(f"{name} must be an integer >= 1, got {value!r}")

        if not isinstance(getattr(logging, str(self.log_level).upper(), None), int):
            raise ConfigurationError(f"Unknown log level: {self.log_level!r}")

    @classmethod
    def from_config(cls, config: Dict) -> 'EngineSettings':
        """
        Build settings from a configuration dictionary.

        Args:
            config: Dictionary as returned by load_config()

        Returns:
            EngineSettings with defaults for missing keys
        """
        engine_config = config.get('engine') or {}
        sweep_config = config.get('sweep') or {}
        portfolio_config = config.get('portfolio') or {}
        logging_config = config.get('logging') or {}
        reporting_config = config.get('reporting') or {}

        return cls(
            expiry_epsilon=engine_config.get('expiry_epsilon', DEFAULT_EXPIRY_EPSILON),
            grid_steps=sweep_config.get('grid_steps', DEFAULT_GRID_STEPS),
            curve_price_steps=sweep_config.get('curve_price_steps', DEFAULT_CURVE_PRICE_STEPS),
            portfolio_steps=portfolio_config.get('steps', DEFAULT_PORTFOLIO_STEPS),
            log_level=logging_config.get('level', 'INFO'),
            log_file=logging_config.get('file'),
            export_path=reporting_config.get('export_path', DEFAULT_EXPORT_PATH)
        )

    @classmethod
    def load(cls, config_path: str = DEFAULT_CONFIG_PATH) -> 'EngineSettings':
        """Load settings from a YAML file."""
        return cls.from_config(load_config(config_path))
