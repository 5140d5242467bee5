"""
EIP-2612 Off-Chain Verification

``verify_permit`` checks a signed permit the way the token's ``permit()``
would, without consuming a nonce or touching any ledger.  It accepts the
raw permit fields as keyword arguments so callers can feed values from any
source (an HTTP payload, a database row, an ``EVMTokenPermit``) without
coupling to a container type.

Unlike ``permit()``, which raises, this returns an ``EVMVerificationResult``
describing why a permit would be rejected.
"""

import time
from typing import Any, Dict, Optional

from .recovery import SignatureLike, recover
from .schemas import EVMVerificationResult
from .standards import EIP712Domain, PermitMessage
from .typed_data import permit_digest
from ..engine.exceptions import SignatureError
from ..schemas.bases import VerificationStatus
from ..utils import to_address


def verify_permit(
    *,
    domain: EIP712Domain,
    owner: str,
    spender: str,
    value: int,
    nonce: int,
    deadline: int,
    signature: SignatureLike,
    current_time: Optional[int] = None,
    ledger_state: Optional[Dict[str, Any]] = None,
) -> EVMVerificationResult:
    """
    Verify an EIP-2612 permit signature off-chain.

    Args:
        domain:        Token's EIP-712 domain.
        owner:         Claimed signer and token owner.
        spender:       Address receiving the allowance.
        value:         Allowance amount.
        nonce:         Nonce the permit is expected to have been signed for
                       (normally the owner's current nonce).
        deadline:      Permit expiry (Unix seconds).
        signature:     Any shape accepted by ``recovery.recover``.
        current_time:  Clock reading to compare with ``deadline``; defaults
                       to ``time.time()``.
        ledger_state:  Optional snapshot echoed back in the result.

    Returns:
        ``EVMVerificationResult`` with ``status`` one of ``SUCCESS``,
        ``EXPIRED``, ``INVALID_SIGNATURE`` or ``INVALID_SIGNER``.
    """
    now = int(time.time()) if current_time is None else current_time
    owner = to_address(owner)
    spender = to_address(spender)

    base = dict(
        owner=owner,
        spender=spender,
        authorized_amount=value,
        ledger_state=ledger_state,
    )

    if now > deadline:
        return EVMVerificationResult(
            status=VerificationStatus.EXPIRED,
            is_valid=False,
            message="Permit deadline has passed",
            error_details={"deadline": deadline, "current_time": now},
            **base,
        )

    digest = permit_digest(
        domain,
        PermitMessage(owner=owner, spender=spender, value=value, nonce=nonce, deadline=deadline),
    )

    try:
        signer = recover(digest, signature)
    except SignatureError as e:
        return EVMVerificationResult(
            status=VerificationStatus.INVALID_SIGNATURE,
            is_valid=False,
            message=str(e),
            error_details={"error": type(e).__name__},
            **base,
        )

    if signer != owner:
        return EVMVerificationResult(
            status=VerificationStatus.INVALID_SIGNER,
            is_valid=False,
            message="Recovered signer does not match owner",
            error_details={"signer": signer, "owner": owner},
            signer=signer,
            **base,
        )

    return EVMVerificationResult(
        status=VerificationStatus.SUCCESS,
        is_valid=True,
        message="Permit signature is valid",
        signer=signer,
        **base,
    )
