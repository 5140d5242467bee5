from .clock import Clock, SystemClock, FixedClock
from .nonces import NonceCapability, NonceLedger
from .events import TransferEvent, ApprovalEvent
from .ledger import ERC20Ledger
from .permit import ERC20Permit

__all__ = [
    "Clock",
    "SystemClock",
    "FixedClock",
    "NonceCapability",
    "NonceLedger",
    "TransferEvent",
    "ApprovalEvent",
    "ERC20Ledger",
    "ERC20Permit",
]
