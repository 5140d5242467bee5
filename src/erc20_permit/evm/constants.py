"""
EVM signing constants: curve order bounds and EIP-712 type strings.

The type strings are part of the wire format shared with external
signers; any change in spelling, spacing or field order produces a
different type hash.
"""

from eth_utils import keccak

from .standards import DOMAIN_FIELDS, PERMIT_FIELDS, encode_type

# ---------------------------------------------------------------------------
# secp256k1
# ---------------------------------------------------------------------------

#: Order ``n`` of the secp256k1 base point.
SECP256K1_N: int = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141

#: Largest ``s`` accepted by recovery (``n // 2``), per EIP-2.
SECP256K1_HALF_N: int = 0x7FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFF5D576E7357A4501DDFE92F46681B20A0

#: Mask extracting ``s`` from an EIP-2098 ``vs`` word.
COMPACT_S_MASK: int = (1 << 255) - 1

SIGNATURE_LENGTH: int = 65
COMPACT_SIGNATURE_LENGTH: int = 64

# ---------------------------------------------------------------------------
# EIP-712
# ---------------------------------------------------------------------------

EIP712_DOMAIN_TYPE: str = encode_type("EIP712Domain", DOMAIN_FIELDS)
PERMIT_TYPE: str = encode_type("Permit", PERMIT_FIELDS)

EIP712_DOMAIN_TYPEHASH: bytes = keccak(text=EIP712_DOMAIN_TYPE)
PERMIT_TYPEHASH: bytes = keccak(text=PERMIT_TYPE)

#: ``0x19 0x01`` prefix of an EIP-712 digest pre-image.
EIP712_PREFIX: bytes = b"\x19\x01"

#: EIP-5267 field bitmap: name, version, chainId, verifyingContract.
EIP712_DOMAIN_FIELDS: bytes = b"\x0f"
