"""
Configuration management for the vendor lookup CLI.
Handles loading and validating configuration from environment variables and files.
"""

import os
from dataclasses import dataclass
from typing import Optional
from pathlib import Path
from dotenv import load_dotenv

from ..render import OUTPUT_FORMATS


@dataclass
class Config:
    """Configuration settings for the vendor lookup CLI."""

    # Source settings
    source: str = './data/customers.csv'

    # Refresh settings
    refresh_interval: float = 30.0
    fetch_timeout: float = 10.0

    # Logging settings
    log_level: str = 'INFO'

    # Output settings
    output_format: str = 'text'  # text, json, csv, html

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> 'Config':
        """Create configuration from environment variables.

        Args:
            env_file: Optional path to .env file

        Returns:
            Config: Configuration instance

        Raises:
            ValueError: If a numeric variable cannot be parsed
        """
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()

        try:
            return cls(
                source=os.getenv('VENDOR_LOOKUP_SOURCE', './data/customers.csv'),
                refresh_interval=float(os.getenv('REFRESH_INTERVAL', '30')),
                fetch_timeout=float(os.getenv('FETCH_TIMEOUT', '10')),
                log_level=os.getenv('LOG_LEVEL', 'INFO'),
                output_format=os.getenv('OUTPUT_FORMAT', 'text')
            )
        except ValueError as e:
            raise ValueError(f"Invalid numeric setting in environment: {e}") from e

    def validate(self) -> bool:
        """Validate configuration settings.

        Returns:
            bool: True if configuration is valid
        """
        if not self.source:
            raise ValueError("source must not be empty")

        # Validate numeric values are positive
        if self.refresh_interval <= 0:
            raise ValueError("refresh_interval must be positive")
        if self.fetch_timeout <= 0:
            raise ValueError("fetch_timeout must be positive")

        # Validate output format
        if self.output_format not in OUTPUT_FORMATS:
            raise ValueError(f"output_format must be one of: {', '.join(OUTPUT_FORMATS)}")

        return True
