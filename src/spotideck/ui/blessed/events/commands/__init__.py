"""Remote command execution."""

from .executor import CommandExecutor, run_command

__all__ = ["CommandExecutor", "run_command"]
