"""
Utility Functions Module

Provides essential utilities:
- Logging configuration
- Seed management for reproducible engines
- Tabular export of generated samples
"""

import sys
import logging
from pathlib import Path
from typing import Any, List, Optional, Union
from logging.handlers import RotatingFileHandler

import numpy as np
import pandas as pd

from .config import DEFAULT_SEED


class LoggerConfig:
    """
    Logging configuration manager

    Sets up consistent logging across the package
    """

    @staticmethod
    def setup_logger(
        name: str = "anondata",
        level: int = logging.INFO,
        log_file: Optional[Union[str, Path]] = None,
        log_to_console: bool = True,
        log_format: Optional[str] = None
    ) -> logging.Logger:
        """
        Setup and configure logger

        Args:
            name: Logger name
            level: Logging level
            log_file: Optional file path for file logging
            log_to_console: Whether to log to console
            log_format: Custom log format

        Returns:
            Configured logger
        """
        logger = logging.getLogger(name)
        logger.setLevel(level)

        # Remove existing handlers
        logger.handlers.clear()

        if log_format is None:
            log_format = (
                '%(asctime)s - %(name)s - %(levelname)s - '
                '%(filename)s:%(lineno)d - %(message)s'
            )

        formatter = logging.Formatter(log_format)

        if log_to_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(level)
            console_handler.setFormatter(formatter)
            logger.addHandler(console_handler)

        if log_file:
            log_file = Path(log_file)
            log_file.parent.mkdir(parents=True, exist_ok=True)

            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=10 * 1024 * 1024,  # 10 MB
                backupCount=5
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

        return logger

    @staticmethod
    def get_logger(name: str = "anondata") -> logging.Logger:
        """Get existing logger or create default one"""
        logger = logging.getLogger(name)

        if not logger.handlers:
            LoggerConfig.setup_logger(name)

        return logger


class SeedManager:
    """
    Manages random seeds for reproducibility

    Each engine owns its own numpy Generator; nothing here touches the
    global numpy or stdlib random state.
    """

    def __init__(self, seed: Optional[int] = DEFAULT_SEED):
        """
        Initialize seed manager

        Args:
            seed: Random seed (None for OS entropy)
        """
        self.seed = seed
        self._original_seed = seed

    def create_generator(self, seed: Optional[int] = None) -> np.random.Generator:
        """
        Build a numpy Generator

        Args:
            seed: Random seed (uses stored seed if None)

        Returns:
            A freshly seeded Generator
        """
        if seed is None:
            seed = self.seed

        if seed is not None:
            logging.getLogger(__name__).debug(f"Random seed set to: {seed}")
        else:
            logging.getLogger(__name__).debug("No seed set - using random initialization")

        return np.random.default_rng(seed)

    def get_seed(self) -> Optional[int]:
        """Get current seed"""
        return self.seed

    def reset_seed(self) -> np.random.Generator:
        """Generator for the original seed"""
        self.seed = self._original_seed
        return self.create_generator()

    @staticmethod
    def derive_seed(random: np.random.Generator) -> int:
        """Draw a 32-bit seed for a dependent source (e.g. Faker) from a Generator"""
        return int(random.integers(0, 2**32 - 1, dtype=np.uint32))


class SampleWriter:
    """Writes generated samples to tabular files (CSV, JSON)"""

    @staticmethod
    def to_frame(values: List[Any], column: str = "value") -> pd.DataFrame:
        """One row per generated value; object values are rendered with repr"""
        rows = [
            value if isinstance(value, (bool, int, float, str)) else repr(value)
            for value in values
        ]
        return pd.DataFrame({column: rows})

    @staticmethod
    def write(values: List[Any], filepath: Union[str, Path], column: str = "value"):
        """
        Write samples based on file extension

        Args:
            values: Generated values
            filepath: Output path (.csv or .json)
            column: Column name
        """
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)
        frame = SampleWriter.to_frame(values, column)

        extension = filepath.suffix.lower()
        if extension == '.csv':
            frame.to_csv(filepath, index=False)
        elif extension == '.json':
            frame.to_json(filepath, orient='records', indent=2)
        else:
            raise ValueError(f"Unsupported file format: {extension}")

        logging.getLogger(__name__).info(f"Wrote {len(frame)} samples to {filepath}")


# Convenience functions
def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None
):
    """
    Quick logging setup

    Args:
        level: Logging level
        log_file: Optional log file path
    """
    LoggerConfig.setup_logger(level=level, log_file=log_file)
