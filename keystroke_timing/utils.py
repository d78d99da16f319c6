# ABOUTME: Shared utilities for keystroke timing capture: config, logging, clock and rounding
import time
import logging
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml


class ConfigManager:
    """Configuration management with validation."""

    def __init__(self, config_path: Optional[Union[str, Path]] = "config.yaml"):
        self.config_path = Path(config_path) if config_path else None
        self.config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration, layering the file over the defaults."""
        config = self._default_config()
        if self.config_path is None:
            return config
        try:
            with open(self.config_path, "r") as f:
                loaded = yaml.safe_load(f)
        except FileNotFoundError:
            logging.warning(f"Config file {self.config_path} not found, using defaults")
            return config
        except yaml.YAMLError as e:
            logging.error(f"Error parsing config file: {e}")
            return config

        if not isinstance(loaded, dict):
            logging.warning(f"Config file {self.config_path} is empty, using defaults")
            return config

        for section, values in loaded.items():
            if isinstance(values, dict) and isinstance(config.get(section), dict):
                config[section].update(values)
            else:
                config[section] = values
        return config

    def _default_config(self) -> Dict[str, Any]:
        """Default configuration values."""
        return {
            "capture": {
                "first_down_default": -0.01,
            },
            "form": {
                "password_field": "password",
                "extra_word_field": "extraWord",
                "data_field": "keystrokeData",
            },
            "output": {
                "log_level": "INFO",
                "log_file": None,
            },
        }

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value with dot notation."""
        keys = key.split(".")
        value = self.config
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Configure logging for the application."""
    handlers: list = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


def monotonic_ms() -> float:
    """High-resolution monotonic clock in milliseconds."""
    return time.perf_counter() * 1000.0


def round_half_up(value: float, digits: int) -> float:
    """Round to a number of decimals with exact halves going away from zero."""
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def round_timing(value: Optional[float], digits: int = 4) -> Optional[float]:
    """Round a timestamp or duration, leaving missing values as None."""
    if value is None:
        return None
    return round_half_up(value, digits)
