"""Sender account model"""

from dataclasses import dataclass


@dataclass
class ProvisionedAccount:
    """Sender identity established for a run

    When ``generated`` is set the private key exists nowhere else; callers
    must show or store it before the run ends.
    """

    address: str
    private_key: str
    public_key: str
    generated: bool = False
    funded_amount: int = 0

    def __repr__(self) -> str:
        return (
            f"ProvisionedAccount(address={self.address!r}, "
            f"generated={self.generated}, funded_amount={self.funded_amount})"
        )
