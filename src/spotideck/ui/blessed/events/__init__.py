"""Event handling: input parsing, the update step, and command execution."""
