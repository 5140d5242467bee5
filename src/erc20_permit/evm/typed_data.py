"""
EIP-712 Digest Builder

Computes the three hashes that make up an EIP-712 signing digest for an
EIP-2612 permit:

domain_separator
    ``keccak256(abi.encode(DOMAIN_TYPEHASH, keccak(name), keccak(version),
    chainId, verifyingContract))``

permit_struct_hash
    ``keccak256(abi.encode(PERMIT_TYPEHASH, owner, spender, value, nonce,
    deadline))``

typed_data_digest
    ``keccak256(0x19 || 0x01 || domainSeparator || structHash)``

Encoding uses ``eth_abi`` tuple encoding (32-byte big-endian slots);
dynamic ``string`` members are hashed before inclusion. The results match
``eth_account.messages.encode_typed_data`` byte for byte, so digests built
here verify signatures produced by any EIP-712 wallet.
"""

from eth_abi import encode
from eth_utils import keccak

from .constants import EIP712_DOMAIN_TYPEHASH, PERMIT_TYPEHASH, EIP712_PREFIX
from .standards import EIP712Domain, PermitMessage
from ..utils import to_address


def domain_separator(domain: EIP712Domain) -> bytes:
    """
    Hash an ``EIP712Domain`` into its 32-byte domain separator.

    Args:
        domain: Domain descriptor (name, version, chainId, verifyingContract).

    Returns:
        32-byte separator.
    """
    return keccak(
        encode(
            ["bytes32", "bytes32", "bytes32", "uint256", "address"],
            [
                EIP712_DOMAIN_TYPEHASH,
                keccak(domain.name.encode("utf-8")),
                keccak(domain.version.encode("utf-8")),
                domain.chainId,
                to_address(domain.verifyingContract),
            ],
        )
    )


def permit_struct_hash(
    owner: str,
    spender: str,
    value: int,
    nonce: int,
    deadline: int,
) -> bytes:
    """
    Hash the fields of an EIP-2612 ``Permit`` struct.

    Returns:
        32-byte struct hash.
    """
    return keccak(
        encode(
            ["bytes32", "address", "address", "uint256", "uint256", "uint256"],
            [
                PERMIT_TYPEHASH,
                to_address(owner),
                to_address(spender),
                value,
                nonce,
                deadline,
            ],
        )
    )


def hash_permit_message(message: PermitMessage) -> bytes:
    return permit_struct_hash(
        message.owner,
        message.spender,
        message.value,
        message.nonce,
        message.deadline,
    )


def typed_data_digest(separator: bytes, struct_hash: bytes) -> bytes:
    """
    Combine a domain separator and a struct hash into the final digest.

    The pre-image is exactly 66 bytes: ``0x19 0x01`` followed by the two
    32-byte hashes.

    Raises:
        ValueError: If either input is not 32 bytes long.
    """
    if len(separator) != 32:
        raise ValueError(f"domain separator must be 32 bytes, got {len(separator)}")
    if len(struct_hash) != 32:
        raise ValueError(f"struct hash must be 32 bytes, got {len(struct_hash)}")
    return keccak(EIP712_PREFIX + separator + struct_hash)


def permit_digest(domain: EIP712Domain, message: PermitMessage) -> bytes:
    """Digest an external signer produces for ``message`` under ``domain``."""
    return typed_data_digest(domain_separator(domain), hash_permit_message(message))
