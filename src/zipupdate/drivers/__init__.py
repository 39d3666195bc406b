"""Drivers: subprocess transports used by the filter layer."""

from .shell import spawn_shell

__all__ = ["spawn_shell"]
