"""
Pydantic models for EIP-2612 permit signatures, signed permits and the
result of checking one off-chain.
"""

import string
from typing import Any, Dict, Literal, Optional, Tuple

from eth_utils import to_bytes
from pydantic import Field
from web3 import Web3

from ..schemas.bases import (
    BaseSignature,
    BasePermit,
    BaseVerificationResult,
)
from ..utils import hex_to_bytes32
from .constants import COMPACT_S_MASK, SIGNATURE_LENGTH, COMPACT_SIGNATURE_LENGTH


class EVMECDSASignature(BaseSignature):
    """
    EVM ECDSA signature (v, r, s).

    Attributes:
        signature_type: Always ``"EIP2612"``.
        v: Recovery id, 27 or 28.
        r: r component, 32 bytes as a 64-char hex string (0x prefix optional).
        s: s component, 32 bytes as a 64-char hex string (0x prefix optional).

    Example::

        sig = EVMECDSASignature(v=27, r="0x" + "a" * 64, s="0x" + "b" * 64)
        sig.validate_format()
        sig.to_packed_hex()   # r || s || v
        sig.to_compact_hex()  # r || vs (EIP-2098)
    """

    signature_type: Literal["EIP2612"] = Field(default="EIP2612", description="Signing standard")
    v: int = Field(..., ge=27, le=28, description="Recovery id")
    r: str = Field(..., description="r as 32-byte hex")
    s: str = Field(..., description="s as 32-byte hex")

    @classmethod
    def from_vrs(cls, v: int, r: int, s: int) -> "EVMECDSASignature":
        return cls(v=v, r="0x" + r.to_bytes(32, "big").hex(), s="0x" + s.to_bytes(32, "big").hex())

    @classmethod
    def from_hex(cls, signature: str) -> "EVMECDSASignature":
        """
        Parse a 65-byte ``r || s || v`` or 64-byte ``r || vs`` hex signature.

        Raises:
            ValueError: On any other length, or when ``v`` is not 27/28.
        """
        raw = to_bytes(hexstr=signature)
        r = int.from_bytes(raw[0:32], "big")
        if len(raw) == SIGNATURE_LENGTH:
            return cls.from_vrs(raw[64], r, int.from_bytes(raw[32:64], "big"))
        if len(raw) == COMPACT_SIGNATURE_LENGTH:
            vs = int.from_bytes(raw[32:64], "big")
            return cls.from_vrs((vs >> 255) + 27, r, vs & COMPACT_S_MASK)
        raise ValueError(f"Signature must be 64 or 65 bytes, got {len(raw)}")

    def validate_format(self) -> bool:
        """Check v is 27/28 and r, s are 32-byte hex words; raise ``ValueError`` otherwise."""
        if self.v not in (27, 28):
            raise ValueError(f"v must be 27 or 28, got {self.v}")
        for label, word in (("r", self.r), ("s", self.s)):
            digits = word[2:] if word[:2].lower() == "0x" else word
            if len(digits) != 64 or not all(c in string.hexdigits for c in digits):
                raise ValueError(f"{label} must be a 32-byte hex word, got {word!r}")
        return True

    def to_vrs(self) -> Tuple[int, int, int]:
        return self.v, int(self.r, 16), int(self.s, 16)

    def to_bytes(self) -> bytes:
        """Packed 65-byte ``r || s || v``."""
        self.validate_format()
        return hex_to_bytes32(self.r) + hex_to_bytes32(self.s) + bytes([self.v])

    def to_packed_hex(self) -> str:
        """0x-prefixed hex of ``to_bytes()`` (132 characters)."""
        return "0x" + self.to_bytes().hex()

    def to_compact_hex(self) -> str:
        """
        Encode into the 64-byte EIP-2098 form ``r || vs``.

        ``vs`` carries the y-parity (``v - 27``) in its top bit.

        Returns:
            0x-prefixed 130-character hex string.
        """
        self.validate_format()
        _, r, s = self.to_vrs()
        vs = ((self.v - 27) << 255) | s
        return "0x" + r.to_bytes(32, "big").hex() + vs.to_bytes(32, "big").hex()


class EVMTokenPermit(BasePermit):
    """
    Signed EIP-2612 ``permit`` call data.

    ``token`` is the EIP-712 ``verifyingContract``; ``nonce`` is the owner
    nonce the signer saw when signing.

    Example::

        permit = sign_permit(private_key=key, domain_name="My Token", domain_version="1",
                             chain_id=1, token=token_address, spender=spender,
                             value=10**18, nonce=token.nonces(owner), deadline=deadline)
        token.submit_permit(permit)
    """

    permit_type: Literal["EIP2612"] = Field(default="EIP2612", description="Permit standard")
    owner: str = Field(..., description="Owner and expected signer")
    spender: str = Field(..., description="Address receiving the allowance")
    token: str = Field(..., description="Token address (verifyingContract)")
    value: int = Field(..., ge=0, lt=2**256, description="Approved amount in the token's smallest unit")
    nonce: int = Field(..., ge=0, lt=2**256, description="Owner nonce for replay protection")
    deadline: int = Field(..., ge=0, lt=2**256, description="Unix timestamp after which the permit expires")
    chain_id: int = Field(..., ge=1, description="Chain id of the signed domain")
    signature: EVMECDSASignature = Field(..., description="Owner signature over the permit digest")

    def validate_structure(self) -> bool:
        """Check the three addresses and the embedded signature; raise ``ValueError`` otherwise."""
        for role in ("owner", "spender", "token"):
            address = getattr(self, role)
            if not Web3.is_address(address):
                raise ValueError(f"{role} is not an EVM address: {address!r}")
        self.signature.validate_format()
        return True


class EVMVerificationResult(BaseVerificationResult):
    """
    Outcome of an off-chain EIP-2612 permit check.

    Attributes:
        verification_type: Always ``"evm"``.
        owner:             Claimed permit owner.
        spender:           Authorized spender.
        signer:            Address recovered from the signature, if any.
        authorized_amount: Permit value in the token's smallest unit.
        ledger_state:      Optional snapshot (nonce, allowance) at check time.
    """

    verification_type: Literal["evm"] = Field(default="evm", description="Always evm")
    owner: Optional[str] = Field(None, description="Claimed permit owner")
    spender: Optional[str] = Field(None, description="Authorized spender")
    signer: Optional[str] = Field(None, description="Address recovered from the signature")
    authorized_amount: Optional[int] = Field(None, ge=0, description="Permit value in the token's smallest unit")
    ledger_state: Optional[Dict[str, Any]] = Field(None, description="Optional ledger snapshot (nonce, allowance)")
