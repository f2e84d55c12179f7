"""CLI utility functions"""

from .interactive import confirm
from .output import (
    console,
    format_config_summary,
    format_deploy_result,
    show_generated_account,
)

__all__ = [
    "confirm",
    "console",
    "format_config_summary",
    "format_deploy_result",
    "show_generated_account",
]
