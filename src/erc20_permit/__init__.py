from .config import TokenSettings, load_settings
from .token import ERC20Permit, ERC20Ledger, NonceLedger, FixedClock, SystemClock
from .evm import (
    EIP712Domain,
    EVMECDSASignature,
    EVMTokenPermit,
    domain_separator,
    permit_struct_hash,
    typed_data_digest,
    recover,
    try_recover,
    sign_permit,
    verify_permit,
)
from .utils import setup_logger

__all__ = [
    "TokenSettings",
    "load_settings",
    "ERC20Permit",
    "ERC20Ledger",
    "NonceLedger",
    "FixedClock",
    "SystemClock",
    "EIP712Domain",
    "EVMECDSASignature",
    "EVMTokenPermit",
    "domain_separator",
    "permit_struct_hash",
    "typed_data_digest",
    "recover",
    "try_recover",
    "sign_permit",
    "verify_permit",
    "setup_logger",
]
