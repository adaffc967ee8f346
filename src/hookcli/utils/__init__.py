"""Utilities Package.

Modules:
    config: Configuration builder and access functions
    logger: Component logging on top of Rich
"""

# Make the main modules available at package level
from . import config, logger

__all__ = ["config", "logger"]
