"""Configuration and logging helpers."""
from .config_loader import EngineSettings, load_config, setup_logging

__all__ = ['EngineSettings', 'load_config', 'setup_logging']
