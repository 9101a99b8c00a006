"""Command registry (single source of truth for help + wiring)."""

from __future__ import annotations

from .models.command_spec import CommandSpec

COMMANDS: tuple[CommandSpec, ...] = (
    CommandSpec("start", "show settings and status button", "cmd_start"),
    CommandSpec("help", "this menu", "cmd_help"),
    CommandSpec("status", "current server status report", "cmd_status"),
)
