"""External process helpers"""

import logging
import os
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .async_utils import sync_to_async
from ..api.exceptions import ToolNotFoundError
from ..constants import APTOS_BIN, APTOS_INSTALL_URL, ENV_APTOS_BIN

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Captured output of a finished command"""

    args: List[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def aptos_bin() -> str:
    """Executable name of the aptos CLI"""
    return os.environ.get(ENV_APTOS_BIN, APTOS_BIN)


def check_aptos_installed() -> str:
    """
    Make sure the aptos CLI can be executed

    Returns:
        Resolved path of the executable

    Raises:
        ToolNotFoundError: If it is not on PATH
    """
    path = shutil.which(aptos_bin())
    if path is None:
        raise ToolNotFoundError("Aptos", APTOS_INSTALL_URL)
    return path


def get_aptos_version() -> Optional[str]:
    """Version string reported by the aptos CLI, None if unavailable"""
    try:
        result = subprocess.run(
            [aptos_bin(), '--version'],
            capture_output=True,
            text=True,
            check=True
        )
        return result.stdout.strip()
    except (subprocess.CalledProcessError, FileNotFoundError):
        return None


def run_command(args: List[str], cwd: Optional[Path] = None) -> CommandResult:
    """
    Run a command to completion and capture its output

    The command gets no stdin: output is captured, so a prompt would never
    be seen. Interactive confirmation happens before the call.

    Raises:
        ToolNotFoundError: If the executable does not exist
    """
    logger.debug("Executing command: %s", " ".join(args))
    try:
        result = subprocess.run(
            args,
            cwd=cwd,
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True
        )
    except FileNotFoundError:
        raise ToolNotFoundError(args[0], APTOS_INSTALL_URL)

    for line in result.stderr.splitlines():
        logger.debug("[stderr] %s", line)

    return CommandResult(
        args=list(args),
        returncode=result.returncode,
        stdout=result.stdout,
        stderr=result.stderr
    )


run_command_async = sync_to_async(run_command)
