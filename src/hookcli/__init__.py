"""hookcli.

Command registry, option validation and lifecycle contract for hook-driven
command-line tools.

This package contains:
- Command definitions and the registry that holds them
- Command resolution and option validation
- Structured schema file loading
- The hookcli command-line interface
"""

# Version information
__version__ = "0.4.0"

__all__ = ["__version__"]
