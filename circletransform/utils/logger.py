"""Logging utilities."""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Union

from circletransform.errors import InvalidConfigError


def setup_logger(name: str = 'circletransform', log_level: Union[int, str] = logging.INFO,
                log_file: Optional[str] = None) -> logging.Logger:
    """Setup logger with console and optional file handler."""
    logger = logging.getLogger(name)
    logger.setLevel(log_level)
    
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    
    # Repeated setup must not stack duplicate handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)
    
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
    
    return logger


def setup_from_config(config: Dict[str, Any], name: str = 'circletransform') -> logging.Logger:
    """Setup logger from the 'logging' section of a configuration dictionary."""
    section = config.get('logging', {}) or {}
    level = section.get('level', 'INFO')
    if isinstance(level, str):
        level = level.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise InvalidConfigError(f"Unknown logging level: {level!r}")
    elif isinstance(level, bool) or not isinstance(level, int):
        raise InvalidConfigError(f"Logging level must be a name or an integer, got {level!r}")
    return setup_logger(name, level, section.get('log_file'))

