"""
EIP-2612 Off-Chain Signing Utilities

Local EIP-712 signing helpers for ``permit``.  All cryptographic operations
are performed in-process using ``eth_account``; no RPC calls are made.

Exported helpers
----------------
build_permit_typed_data
    Wrap permit fields in an ``EIP712TypedData`` envelope without signing.
    Useful when the signing step is handled externally (e.g. a hardware
    wallet or MPC service).

sign_permit
    Build the EIP-712 payload, sign it with a private key, and return a
    complete ``EVMTokenPermit`` with ``EVMECDSASignature`` (v, r, s).
"""

from eth_account import Account

from .standards import EIP712Domain, PermitMessage, EIP712TypedData
from .schemas import EVMECDSASignature, EVMTokenPermit
from ..utils import to_address


def build_permit_typed_data(
    *,
    domain_name: str,
    domain_version: str,
    chain_id: int,
    token: str,
    owner: str,
    spender: str,
    value: int,
    nonce: int,
    deadline: int,
) -> EIP712TypedData:
    """
    Wrap permit fields in an EIP-712 envelope without signing.

    Args:
        domain_name:    EIP-712 domain ``name`` as stored in the token.
        domain_version: EIP-712 domain ``version`` string (e.g. ``"1"``).
        chain_id:       EVM network ID.
        token:          Token address, used as ``verifyingContract``.
        owner:          Token owner granting the allowance.
        spender:        Address receiving the allowance.
        value:          Allowance amount.
        nonce:          Owner's current nonce on the token.
        deadline:       Unix timestamp after which the permit is invalid.

    Returns:
        ``EIP712TypedData`` whose ``to_dict()`` is compatible with
        ``eth_account.Account.sign_typed_data`` and ``eth_signTypedData_v4``.

    Example::

        typed_data = build_permit_typed_data(
            domain_name="My Token", domain_version="1", chain_id=1,
            token="0x...", owner="0x...", spender="0x...",
            value=100, nonce=0, deadline=1_900_000_000,
        )
        payload = typed_data.to_dict()   # hand off to external signer
    """
    domain = EIP712Domain(
        name=domain_name,
        version=domain_version,
        chainId=chain_id,
        verifyingContract=to_address(token),
    )
    message = PermitMessage(
        owner=to_address(owner),
        spender=to_address(spender),
        value=value,
        nonce=nonce,
        deadline=deadline,
    )
    return EIP712TypedData(domain=domain, message=message)


def sign_permit(
    *,
    private_key: str,
    domain_name: str,
    domain_version: str,
    chain_id: int,
    token: str,
    spender: str,
    value: int,
    nonce: int,
    deadline: int,
) -> EVMTokenPermit:
    """
    Sign an EIP-2612 ``permit`` and return a complete ``EVMTokenPermit``.

    The owner is the address derived from ``private_key``.  ``nonce`` must
    be the owner's *current* nonce on the token: the token consumes it on
    submission, and a permit signed for any other nonce fails with
    ``InvalidSignerError``.

    Args:
        private_key:    Hex-encoded secp256k1 private key of the owner.
        domain_name:    EIP-712 domain ``name`` of the token.
        domain_version: EIP-712 domain ``version`` of the token.
        chain_id:       EVM network ID.
        token:          Token address (``verifyingContract``).
        spender:        Address receiving the allowance.
        value:          Allowance amount.
        nonce:          Owner's current nonce.
        deadline:       Unix timestamp after which the permit is invalid.

    Returns:
        ``EVMTokenPermit`` with ``signature`` populated (v, r, s).
    """
    owner = Account.from_key(private_key).address

    typed_data = build_permit_typed_data(
        domain_name=domain_name,
        domain_version=domain_version,
        chain_id=chain_id,
        token=token,
        owner=owner,
        spender=spender,
        value=value,
        nonce=nonce,
        deadline=deadline,
    )
    signed = Account.sign_typed_data(private_key, full_message=typed_data.to_dict())

    return EVMTokenPermit(
        owner=owner,
        spender=typed_data.message.spender,
        token=typed_data.domain.verifyingContract,
        value=value,
        nonce=nonce,
        deadline=deadline,
        chain_id=chain_id,
        signature=EVMECDSASignature.from_vrs(signed.v, signed.r, signed.s),
    )
