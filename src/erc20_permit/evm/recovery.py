"""
Canonical ECDSA Signer Recovery

Recovers the address that signed a 32-byte digest, enforcing the same
rules as an on-chain ``ecrecover`` wrapper that rejects malleable
signatures:

* ``s`` must lie in the lower half of the secp256k1 order (EIP-2).
* ``v`` must be 27 or 28.
* Recovery must produce a real point; the zero address is never a valid
  signer.

Accepted signature shapes
-------------------------
- 65-byte ``r || s || v`` (bytes or 0x-hex)
- 64-byte EIP-2098 compact ``r || vs`` (bytes or 0x-hex)
- ``(v, r, s)`` integer triple
- ``(r, vs)`` integer pair
- ``EVMECDSASignature`` model

Each ``try_*`` function returns a tagged result
``(address | None, RecoverError, error_arg)``; the plain variants raise the
matching ``SignatureError`` subclass instead. Curve arithmetic is
delegated to ``eth_keys``.
"""

from enum import Enum
from typing import Optional, Tuple, Union

from eth_keys import keys
from eth_keys.exceptions import BadSignature, ValidationError
from eth_utils import to_bytes

from .constants import (
    SECP256K1_N,
    SECP256K1_HALF_N,
    COMPACT_S_MASK,
    SIGNATURE_LENGTH,
    COMPACT_SIGNATURE_LENGTH,
)
from .schemas import EVMECDSASignature
from ..engine.exceptions import (
    InvalidSignatureError,
    InvalidSignatureLengthError,
    InvalidSignatureSError,
)
from ..utils import ZERO_ADDRESS

SignatureLike = Union[bytes, str, EVMECDSASignature, Tuple[int, int], Tuple[int, int, int]]
RecoverResult = Tuple[Optional[str], "RecoverError", int]


class RecoverError(str, Enum):
    """
    Outcome tag of a ``try_recover*`` call.

    Attributes:
        NO_ERROR: A signer was recovered
        INVALID_SIGNATURE: Degenerate inputs or zero-address result
        INVALID_SIGNATURE_LENGTH: Serialized form was not 64 or 65 bytes;
            the error argument is the length
        INVALID_SIGNATURE_S: ``s`` above ``n / 2``; the error argument is ``s``
    """
    NO_ERROR = "no_error"
    INVALID_SIGNATURE = "invalid_signature"
    INVALID_SIGNATURE_LENGTH = "invalid_signature_length"
    INVALID_SIGNATURE_S = "invalid_signature_s"


# ---------------------------------------------------------------------------
# Signature unpacking
# ---------------------------------------------------------------------------

def unpack_compact(r: int, vs: int) -> Tuple[int, int, int]:
    """
    Expand an EIP-2098 ``(r, vs)`` pair into ``(v, r, s)``.

    The top bit of ``vs`` is the y-parity; the remaining 255 bits are ``s``.
    """
    s = vs & COMPACT_S_MASK
    v = (vs >> 255) + 27
    return v, r, s


def _to_signature_bytes(signature: Union[bytes, str]) -> bytes:
    if isinstance(signature, str):
        return to_bytes(hexstr=signature)
    return bytes(signature)


def _check_digest(digest: bytes) -> None:
    if len(digest) != 32:
        raise ValueError(f"digest must be 32 bytes, got {len(digest)}")


# ---------------------------------------------------------------------------
# Tagged-result recovery
# ---------------------------------------------------------------------------

def try_recover_vrs(digest: bytes, v: int, r: int, s: int) -> RecoverResult:
    """
    Recover the signer of ``digest`` from expanded ``(v, r, s)`` components.

    Returns:
        ``(checksum_address, RecoverError.NO_ERROR, 0)`` on success, otherwise
        ``(None, <error>, <error_arg>)``.
    """
    _check_digest(digest)

    if s > SECP256K1_HALF_N:
        return None, RecoverError.INVALID_SIGNATURE_S, s

    if v not in (27, 28) or not 0 < r < SECP256K1_N or s == 0:
        return None, RecoverError.INVALID_SIGNATURE, 0

    try:
        public_key = keys.Signature(vrs=(v - 27, r, s)).recover_public_key_from_msg_hash(digest)
    except (BadSignature, ValidationError):
        return None, RecoverError.INVALID_SIGNATURE, 0

    signer = public_key.to_checksum_address()
    if signer == ZERO_ADDRESS:
        return None, RecoverError.INVALID_SIGNATURE, 0

    return signer, RecoverError.NO_ERROR, 0


def try_recover_compact(digest: bytes, r: int, vs: int) -> RecoverResult:
    """Recover from an EIP-2098 ``(r, vs)`` pair."""
    v, r, s = unpack_compact(r, vs)
    return try_recover_vrs(digest, v, r, s)


def try_recover_bytes(digest: bytes, signature: Union[bytes, str]) -> RecoverResult:
    """
    Recover from a serialized signature.

    65 bytes are read as ``r || s || v``; 64 bytes as ``r || vs``. Any other
    length yields ``RecoverError.INVALID_SIGNATURE_LENGTH``.
    Hex that does not decode yields ``RecoverError.INVALID_SIGNATURE``.
    """
    try:
        raw = _to_signature_bytes(signature)
    except ValueError:
        return None, RecoverError.INVALID_SIGNATURE, 0

    if len(raw) == SIGNATURE_LENGTH:
        r = int.from_bytes(raw[0:32], "big")
        s = int.from_bytes(raw[32:64], "big")
        return try_recover_vrs(digest, raw[64], r, s)

    if len(raw) == COMPACT_SIGNATURE_LENGTH:
        r = int.from_bytes(raw[0:32], "big")
        vs = int.from_bytes(raw[32:64], "big")
        return try_recover_compact(digest, r, vs)

    return None, RecoverError.INVALID_SIGNATURE_LENGTH, len(raw)


def try_recover(digest: bytes, signature: SignatureLike) -> RecoverResult:
    """Dispatch on the shape of ``signature``; see the module docstring."""
    if isinstance(signature, EVMECDSASignature):
        try:
            v, r, s = signature.to_vrs()
        except ValueError:
            return None, RecoverError.INVALID_SIGNATURE, 0
        return try_recover_vrs(digest, v, r, s)

    if isinstance(signature, tuple):
        if len(signature) == 3:
            return try_recover_vrs(digest, *signature)
        if len(signature) == 2:
            return try_recover_compact(digest, *signature)
        raise TypeError(f"signature tuple must be (v, r, s) or (r, vs), got {len(signature)} items")

    if isinstance(signature, (bytes, bytearray, str)):
        return try_recover_bytes(digest, signature)

    raise TypeError(f"Unsupported signature type: {type(signature).__name__}")


# ---------------------------------------------------------------------------
# Raising recovery
# ---------------------------------------------------------------------------

def _raise_on_error(result: RecoverResult) -> str:
    signer, error, error_arg = result
    if error == RecoverError.NO_ERROR:
        return signer
    if error == RecoverError.INVALID_SIGNATURE_LENGTH:
        raise InvalidSignatureLengthError(error_arg)
    if error == RecoverError.INVALID_SIGNATURE_S:
        raise InvalidSignatureSError(error_arg)
    raise InvalidSignatureError()


def recover(digest: bytes, signature: SignatureLike) -> str:
    """
    Recover the checksum address that signed ``digest``.

    Raises:
        InvalidSignatureLengthError: Serialized signature is not 64 or 65 bytes.
        InvalidSignatureSError: ``s`` is in the upper half of the curve order.
        InvalidSignatureError: Recovery failed or produced the zero address.
    """
    return _raise_on_error(try_recover(digest, signature))


def recover_vrs(digest: bytes, v: int, r: int, s: int) -> str:
    return _raise_on_error(try_recover_vrs(digest, v, r, s))


def recover_compact(digest: bytes, r: int, vs: int) -> str:
    return _raise_on_error(try_recover_compact(digest, r, vs))
