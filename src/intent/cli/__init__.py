"""
Intent CLI package.

- app.py: Typer application and commands
- utils.py: Shared utilities (version, logging, issue rendering)
"""

from intent.cli.app import app, main
from intent.cli.utils import get_version, version_callback

__all__ = [
    "app",
    "main",
    "get_version",
    "version_callback",
]
