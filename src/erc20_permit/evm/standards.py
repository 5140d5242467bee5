"""
EIP-712 structures for EIP-2612 permits.

The field tuples below fix member order and Solidity types; both the
hashing code and the JSON handed to wallets are derived from them.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Tuple

FieldLayout = Tuple[Tuple[str, str], ...]

DOMAIN_FIELDS: FieldLayout = (
    ("name", "string"),
    ("version", "string"),
    ("chainId", "uint256"),
    ("verifyingContract", "address"),
)

PERMIT_FIELDS: FieldLayout = (
    ("owner", "address"),
    ("spender", "address"),
    ("value", "uint256"),
    ("nonce", "uint256"),
    ("deadline", "uint256"),
)


def encode_type(primary_type: str, layout: FieldLayout) -> str:
    """``encodeType`` of a struct without nested members, e.g. ``Permit(address owner,...)``."""
    members = ",".join(f"{kind} {name}" for name, kind in layout)
    return f"{primary_type}({members})"


def _type_entries(layout: FieldLayout) -> List[Dict[str, str]]:
    return [{"name": name, "type": kind} for name, kind in layout]


@dataclass(frozen=True)
class EIP712Domain:
    """
    EIP-712 domain descriptor.

    Binds a signature to one token instance on one chain. Two domains that
    differ in any field hash to different separators.
    """
    name: str
    version: str
    chainId: int
    verifyingContract: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class PermitMessage:
    """EIP-2612 ``Permit`` struct, built per permit call and never stored."""
    owner: str
    spender: str
    value: int
    nonce: int
    deadline: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class EIP712TypedData:
    """
    Full ``eth_signTypedData_v4`` payload for a permit.

    ``to_dict()`` is accepted as-is by
    ``eth_account.Account.sign_typed_data(full_message=...)``.
    """
    domain: EIP712Domain
    message: PermitMessage
    primary_type: str = "Permit"
    types: Dict[str, List[Dict[str, str]]] = field(
        default_factory=lambda: {
            "EIP712Domain": _type_entries(DOMAIN_FIELDS),
            "Permit": _type_entries(PERMIT_FIELDS),
        }
    )

    def to_dict(self) -> Dict[str, Any]:
        payload = {"types": self.types, "primaryType": self.primary_type}
        payload["domain"] = self.domain.to_dict()
        payload["message"] = self.message.to_dict()
        return payload
