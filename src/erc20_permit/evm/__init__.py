from .standards import EIP712Domain, PermitMessage, EIP712TypedData
from .schemas import (
    EVMECDSASignature,
    EVMTokenPermit,
    EVMVerificationResult,
)
from .typed_data import (
    domain_separator,
    permit_struct_hash,
    hash_permit_message,
    typed_data_digest,
    permit_digest,
)
from .recovery import (
    RecoverError,
    recover,
    recover_vrs,
    recover_compact,
    try_recover,
    try_recover_vrs,
    try_recover_compact,
    unpack_compact,
)
from .signatures import build_permit_typed_data, sign_permit
from .verifies import verify_permit

__all__ = [
    "EIP712Domain",
    "PermitMessage",
    "EIP712TypedData",
    "EVMECDSASignature",
    "EVMTokenPermit",
    "EVMVerificationResult",
    "domain_separator",
    "permit_struct_hash",
    "hash_permit_message",
    "typed_data_digest",
    "permit_digest",
    "RecoverError",
    "recover",
    "recover_vrs",
    "recover_compact",
    "try_recover",
    "try_recover_vrs",
    "try_recover_compact",
    "unpack_compact",
    "build_permit_typed_data",
    "sign_permit",
    "verify_permit",
]
