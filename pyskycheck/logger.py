# Copyright 2024 inuex35
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Logging configuration for integrity validation"""

import logging
import sys
from enum import Enum
from typing import Optional

ROOT_LOGGER = "pyskycheck"


class LogLevel(Enum):
    """Log levels, with TRACE below DEBUG for per-source scoring detail"""
    TRACE = 5
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


TRACE = LogLevel.TRACE.value
logging.addLevelName(TRACE, "TRACE")


def _level(name: str) -> int:
    try:
        return LogLevel[name.upper()].value
    except KeyError:
        raise ValueError(f"Unknown log level: {name}. Must be one of {[lv.name for lv in LogLevel]}") from None


class ColoredFormatter(logging.Formatter):
    """Console formatter that colors the level name"""

    COLORS = {
        'TRACE': '\033[36m',     # Cyan
        'DEBUG': '\033[34m',     # Blue
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def format(self, record):
        # Color a copy so other handlers see the plain level name
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, self.RESET)
        record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


def setup_logger(name: str = ROOT_LOGGER,
                 level: str = "INFO",
                 log_file: Optional[str] = None,
                 console: bool = True) -> logging.Logger:
    """
    Attach console and/or file handlers to a logger.

    Parameters:
    -----------
    name : str
        Logger name ("pyskycheck" configures the whole library)
    level : str
        TRACE, DEBUG, INFO, WARNING, ERROR or CRITICAL
    log_file : Optional[str]
        Log file path (if None, no file logging)
    console : bool
        Log to stdout

    Returns:
    --------
    logging.Logger
        Configured logger
    """
    lvl = _level(level)
    logger = logging.getLogger(name)
    logger.setLevel(lvl)
    logger.handlers = []

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(lvl)
        console_handler.setFormatter(ColoredFormatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%H:%M:%S'
        ))
        logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(lvl)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get logger by name"""
    return logging.getLogger(name)


class LogContext:
    """Context manager for a temporary log level change"""

    def __init__(self, logger: logging.Logger, level: str):
        self.logger = logger
        self.new_level = _level(level)
        self.old_level = None

    def __enter__(self):
        self.old_level = self.logger.level
        self.logger.setLevel(self.new_level)
        return self.logger

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.logger.setLevel(self.old_level)


class LoggerConfig:
    """Per-module log levels on top of a library-wide default"""

    def __init__(self):
        self.module_levels = {}
        self.default_level = "INFO"
        self.log_file = None
        self.console = True

    def set_module_level(self, module_name: str, level: str):
        """Set log level for one module, e.g. 'pyskycheck.validation.consensus'"""
        self.module_levels[module_name] = level
        logging.getLogger(module_name).setLevel(_level(level))

    def get_level_for_module(self, module_name: str) -> str:
        return self.module_levels.get(module_name, self.default_level)

    def configure_from_dict(self, config: dict):
        """Read default_level, log_file, console and module_levels"""
        if 'default_level' in config:
            _level(config['default_level'])
            self.default_level = config['default_level']
        if 'log_file' in config:
            self.log_file = config['log_file']
        if 'console' in config:
            self.console = bool(config['console'])
        for module, level in config.get('module_levels', {}).items():
            self.set_module_level(module, level)

    def setup_all_loggers(self) -> logging.Logger:
        """Configure the library logger; module loggers propagate to it"""
        root = setup_logger(ROOT_LOGGER, self.default_level, self.log_file, self.console)
        # Handlers live on the library logger only; modules just filter by level
        lowest = min([_level(self.default_level)] + [_level(lv) for lv in self.module_levels.values()])
        for handler in root.handlers:
            handler.setLevel(lowest)
        for module, level in self.module_levels.items():
            logging.getLogger(module).setLevel(_level(level))
        return root


# Global logger configuration
logger_config = LoggerConfig()


def setup_logger_from_config(config: dict) -> logging.Logger:
    """Setup loggers from a configuration dictionary

    Example config:
    {
        'default_level': 'INFO',
        'log_file': 'integrity.log',
        'console': True,
        'module_levels': {
            'pyskycheck.validation.consensus': 'TRACE',
            'pyskycheck.celestial.solar': 'DEBUG',
        }
    }
    """
    logger_config.configure_from_dict(config)
    return logger_config.setup_all_loggers()
