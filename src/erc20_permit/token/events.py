"""
Ledger event records.

Every balance or allowance mutation appends one of these to the token's
event log, mirroring the ``Transfer`` and ``Approval`` logs of an ERC-20
contract.
"""

from typing import Union

from pydantic import Field

from ..schemas.bases import CanonicalModel


class TransferEvent(CanonicalModel):
    """Tokens moved; ``sender`` is the zero address on mint, ``receiver`` on burn."""
    sender: str = Field(..., alias="from")
    receiver: str = Field(..., alias="to")
    value: int = Field(..., ge=0)

    def __repr__(self) -> str:
        return f"TransferEvent(from={self.sender}, to={self.receiver}, value={self.value})"


class ApprovalEvent(CanonicalModel):
    """Allowance of ``spender`` over ``owner``'s tokens set to ``value``."""
    owner: str
    spender: str
    value: int = Field(..., ge=0)

    def __repr__(self) -> str:
        return f"ApprovalEvent(owner={self.owner}, spender={self.spender}, value={self.value})"


LedgerEvent = Union[TransferEvent, ApprovalEvent]
