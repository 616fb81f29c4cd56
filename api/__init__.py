"""HTTP surface for the gear generator"""

from .app import app
from .server import GearServer

__all__ = [
    "app",
    "GearServer",
]
