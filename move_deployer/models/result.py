"""Operation result models"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Any

from .account import ProvisionedAccount
from .report import DeploymentReport, TransactionRecord


class PackageState(Enum):
    """Lifecycle of a single package within a run"""
    PENDING = "pending"
    SKIPPED = "skipped"
    RESOLVING = "resolving"
    PUBLISHING = "publishing"
    RETRYING_CHUNKED = "retrying_chunked"
    RECORDED = "recorded"
    FAILED = "failed"


class RunStatus(Enum):
    """Terminal status of a run"""
    COMPLETED = "completed"
    ABORTED = "aborted"
    CANCELLED = "cancelled"


@dataclass
class DeployResult:
    """Result of a deployment run"""

    status: RunStatus
    report: DeploymentReport
    account: Optional[ProvisionedAccount] = None
    package_states: Dict[str, PackageState] = field(default_factory=dict)
    error: Optional[Exception] = None
    report_path: Optional[str] = None
    start_time: datetime = field(default_factory=datetime.now)
    end_time: Optional[datetime] = None

    @property
    def success(self) -> bool:
        return self.status != RunStatus.ABORTED

    @property
    def records(self) -> List[TransactionRecord]:
        return self.report.info

    @property
    def deployed(self) -> List[TransactionRecord]:
        """Records of packages published by this run"""
        return [r for r in self.records
                if self.package_states.get(r.address_name) == PackageState.RECORDED]

    @property
    def skipped(self) -> List[str]:
        """Address names that were already deployed"""
        return [name for name, state in self.package_states.items()
                if state == PackageState.SKIPPED]

    @property
    def duration(self) -> Optional[float]:
        """Run duration in seconds"""
        if self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return None

    def complete(self, status: Optional[RunStatus] = None) -> None:
        """Mark the run as finished"""
        self.end_time = datetime.now()
        if status:
            self.status = status

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "status": self.status.value,
            "report": self.report.to_dict(),
            "package_states": {k: v.value for k, v in self.package_states.items()},
            "error": str(self.error) if self.error else None,
            "report_path": self.report_path,
            "duration": self.duration,
        }
