"""hookcli command-line interface.

Subcommands are loaded lazily by :class:`hookcli.cli.main.LazyGroup`.
"""
