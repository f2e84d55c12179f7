"""Publish capability backed by the external chain tool"""

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from ..api.exceptions import PackageSizeExceededError, PublishError
from ..constants import ARTIFACTS_NONE, OBJECT_ADDRESS_PATTERN, PACKAGE_TOO_LARGE_PATTERN
from ..models.config import DeployMode
from ..utils.process_utils import CommandResult, aptos_bin, run_command_async

logger = logging.getLogger(__name__)


@dataclass
class PublishRequest:
    """Structured parameters of one publish operation"""

    package_path: Path
    mode: DeployMode
    address_name: str
    substitutions: List[Tuple[str, str]] = field(default_factory=list)
    included_artifacts: str = ARTIFACTS_NONE
    assume_yes: bool = False
    chunked: bool = False


@dataclass
class PublishOutcome:
    """Transactions a publish produced

    ``object_address`` is set in object mode only; in account mode the
    package lives at the sender address.
    """

    transactions: List[Dict[str, Any]] = field(default_factory=list)
    object_address: Optional[str] = None


class PublishInvoker(ABC):
    """Abstract base class for publish backends"""

    @abstractmethod
    async def invoke(self, request: PublishRequest) -> PublishOutcome:
        """
        Execute one publish operation

        Args:
            request: What to publish and how

        Returns:
            PublishOutcome with transaction summaries

        Raises:
            PackageSizeExceededError: If the payload needs chunked publishing
            PublishError: For every other failure
        """
        pass


class AptosCliPublisher(PublishInvoker):
    """Publishes packages by running the aptos CLI under a named profile"""

    def __init__(self, profile: str, executable: Optional[str] = None):
        """
        Initialize publisher

        Args:
            profile: Credential store profile holding key and endpoints
            executable: aptos CLI executable, defaults to the configured one
        """
        self.profile = profile
        self.executable = executable or aptos_bin()

    def build_args(self, request: PublishRequest) -> List[str]:
        """Command line for a publish request"""
        if request.mode == DeployMode.OBJECT:
            args = [
                self.executable, "move", "deploy-object",
                "--address-name", request.address_name,
            ]
        else:
            args = [self.executable, "move", "publish"]

        args.extend([
            "--package-dir", str(request.package_path),
            "--profile", self.profile,
            "--included-artifacts", request.included_artifacts,
            "--skip-fetch-latest-git-deps",
        ])

        if request.substitutions:
            args.extend([
                "--named-addresses",
                ",".join(f"{name}={address}" for name, address in request.substitutions),
            ])
        if request.chunked:
            args.append("--chunked-publish")
        if request.assume_yes:
            args.append("--assume-yes")

        return args

    async def invoke(self, request: PublishRequest) -> PublishOutcome:
        args = self.build_args(request)
        logger.info(
            "Publishing %s (%s mode%s)",
            request.package_path,
            request.mode.value,
            ", chunked" if request.chunked else ""
        )

        result = await run_command_async(args)
        return self.parse_result(request, result)

    def parse_result(self, request: PublishRequest, result: CommandResult) -> PublishOutcome:
        """Turn captured CLI output into an outcome or a typed error"""
        payload = _extract_json(result.stdout)

        error = None
        if payload is None:
            if not result.ok:
                error = result.stderr.strip() or result.stdout.strip() or "unknown error"
        elif "Error" in payload:
            error = str(payload["Error"])
        elif not result.ok:
            error = result.stderr.strip() or "unknown error"

        if error is not None:
            if PACKAGE_TOO_LARGE_PATTERN.search(error):
                raise PackageSizeExceededError(str(request.package_path), error)
            raise PublishError(f"Failed to publish {request.package_path}: {error}")

        if payload is None:
            raise PublishError(
                f"Failed to publish {request.package_path}: no result in tool output"
            )

        outcome = PublishOutcome(transactions=_transaction_summaries(payload.get("Result")))

        if request.mode == DeployMode.OBJECT:
            match = OBJECT_ADDRESS_PATTERN.search(result.stdout) \
                or OBJECT_ADDRESS_PATTERN.search(result.stderr)
            if match is None:
                raise PublishError(
                    f"Package {request.address_name} was published but no object "
                    f"address was found in the tool output"
                )
            outcome.object_address = match.group(1)

        return outcome


def _extract_json(output: str) -> Optional[Dict[str, Any]]:
    """Last top-level JSON object printed by the tool"""
    lines = output.splitlines()
    for i in range(len(lines) - 1, -1, -1):
        if not lines[i].startswith("{"):
            continue
        try:
            data = json.loads("\n".join(lines[i:]))
        except json.JSONDecodeError:
            continue
        if isinstance(data, dict):
            return data
    return None


def _transaction_summaries(result: Any) -> List[Dict[str, Any]]:
    if result is None:
        return []
    if isinstance(result, list):
        return [r for r in result if isinstance(r, dict)]
    if isinstance(result, dict):
        return [result]
    return [{"result": result}]
