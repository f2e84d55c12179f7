"""Deployment report persistence"""

import json
import logging
from pathlib import Path
from typing import Union

import aiofiles

from ..api.exceptions import ReportWriteError
from ..models.report import DeploymentReport

logger = logging.getLogger(__name__)


async def write_report(path: Union[str, Path], report: DeploymentReport) -> Path:
    """
    Write the deployment report as pretty-printed JSON

    Args:
        path: Output file path
        report: Finalized report snapshot

    Returns:
        Path written

    Raises:
        ReportWriteError: If the file cannot be written
    """
    path = Path(path)
    content = json.dumps(report.to_dict(), indent=2, ensure_ascii=False)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(path, 'w', encoding='utf-8') as f:
            await f.write(content)
            await f.write("\n")
    except OSError as e:
        raise ReportWriteError(str(path), str(e))

    logger.info("Report written to %s (%d record(s))", path, len(report.info))
    return path


def load_report(path: Union[str, Path]) -> DeploymentReport:
    """
    Load a report written by a previous run

    Raises:
        FileNotFoundError: If the report does not exist
        ValueError: If the report is not valid JSON or misses fields
    """
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Malformed deployment report {path}: expected a JSON object")

    try:
        return DeploymentReport.from_dict(data)
    except (KeyError, TypeError) as e:
        raise ValueError(f"Malformed deployment report {path}: {e}")
