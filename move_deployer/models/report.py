"""Deployment report models"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Any


@dataclass
class TransactionRecord:
    """One deployed package and the transactions that deployed it"""

    package_path: Path
    address_name: str
    deployed_at: str
    tx_info: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to report entry"""
        return {
            "module_path": str(self.package_path),
            "address_name": self.address_name,
            "deployed_at": self.deployed_at,
            "tx_info": list(self.tx_info),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TransactionRecord':
        """Create from report entry"""
        return cls(
            package_path=Path(data["module_path"]),
            address_name=data["address_name"],
            deployed_at=data["deployed_at"],
            tx_info=list(data.get("tx_info", [])),
        )


@dataclass
class DeploymentReport:
    """Persisted outcome of a run"""

    account: Optional[str]
    network: str
    info: List[TransactionRecord] = field(default_factory=list)

    def address_map(self) -> Dict[str, str]:
        """Address name to deployed address, for resuming a later run"""
        return {record.address_name: record.deployed_at for record in self.info}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "account": self.account,
            "network": self.network,
            "info": [record.to_dict() for record in self.info],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DeploymentReport':
        """Create from dictionary"""
        return cls(
            account=data.get("account"),
            network=data["network"],
            info=[TransactionRecord.from_dict(entry) for entry in data.get("info", [])],
        )
