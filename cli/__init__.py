"""CLI package for the D&D Gear Generator

Runs the HTTP server, or generates a single item from stdin with --cli.
"""

from cli.main import main
from cli.oneshot import run_oneshot

__all__ = [
    "main",
    "run_oneshot",
]
