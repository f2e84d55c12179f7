# move_deployer/cli/commands/__init__.py
"""CLI commands"""

from . import deploy
from . import doctor

__all__ = [
    "deploy",
    "doctor",
]
