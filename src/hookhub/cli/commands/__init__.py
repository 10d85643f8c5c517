"""
CLI commands for hookhub
"""

from hookhub.cli.commands import hooks

__all__ = ["hooks"]
