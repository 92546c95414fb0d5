"""Registry for CLI subcommands."""

from .cat_command import CatCommand
from .extract_command import ExtractCommand

COMMANDS = (
    ExtractCommand,
    CatCommand,
)

__all__ = ["COMMANDS", "ExtractCommand", "CatCommand"]
