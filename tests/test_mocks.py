"""
Permit Token Test Mocks Module

Shared constants and factory helpers for the test suite.  Signatures are
real: they are produced in-process with ``eth_account`` from the fixed
test keys below, so no blockchain connectivity is required.

Usage:
    from test_mocks import (
        MOCK_OWNER_ADDRESS,
        create_mock_settings,
        create_signed_permit,
    )
"""

from typing import Optional

from eth_account import Account
from web3 import AsyncWeb3

from erc20_permit.config import TokenSettings
from erc20_permit.evm.schemas import EVMTokenPermit
from erc20_permit.evm.signatures import sign_permit
from erc20_permit.token.clock import FixedClock
from erc20_permit.token.permit import ERC20Permit


# ========================================================================
# Mock Accounts
# ========================================================================

# Test private keys (do not use in production!)
MOCK_OWNER_PRIVATE_KEY = "0x1234567890123456789012345678901234567890123456789012345678901234"
MOCK_SPENDER_PRIVATE_KEY = "0xabcdefabcdefabcdefabcdefabcdefabcdefabcdefabcdefabcdefabcdefabcd"
MOCK_OTHER_PRIVATE_KEY = "0x" + "42" * 32

MOCK_OWNER_ADDRESS = AsyncWeb3.to_checksum_address(Account.from_key(MOCK_OWNER_PRIVATE_KEY).address)
MOCK_SPENDER_ADDRESS = AsyncWeb3.to_checksum_address(Account.from_key(MOCK_SPENDER_PRIVATE_KEY).address)
MOCK_OTHER_ADDRESS = AsyncWeb3.to_checksum_address(Account.from_key(MOCK_OTHER_PRIVATE_KEY).address)
MOCK_RECIPIENT_ADDRESS = "0x1234567890123456789012345678901234567890"


# ========================================================================
# Mock Token
# ========================================================================

MOCK_TOKEN_NAME = "My Token"
MOCK_TOKEN_SYMBOL = "MTKN"
MOCK_TOKEN_VERSION = "1"
MOCK_TOKEN_ADDRESS = AsyncWeb3.to_checksum_address("0x1c7D4B196Cb0C7B01d743Fbc6116a902379C7238")
MOCK_CHAIN_ID = 11155111

MOCK_NOW = 1_700_000_000
MOCK_DEADLINE = MOCK_NOW + 3600
MOCK_VALUE = 100


# ========================================================================
# Factories
# ========================================================================

def create_mock_settings(**overrides) -> TokenSettings:
    """Return ``TokenSettings`` for the mock token, with optional overrides."""
    fields = dict(
        name=MOCK_TOKEN_NAME,
        symbol=MOCK_TOKEN_SYMBOL,
        version=MOCK_TOKEN_VERSION,
        chain_id=MOCK_CHAIN_ID,
        verifying_contract=MOCK_TOKEN_ADDRESS,
    )
    fields.update(overrides)
    return TokenSettings(**fields)


def create_mock_token(
    settings: Optional[TokenSettings] = None,
    now: int = MOCK_NOW,
    **kwargs,
) -> ERC20Permit:
    """Return an ``ERC20Permit`` driven by a ``FixedClock`` set to ``now``."""
    return ERC20Permit(settings or create_mock_settings(), clock=FixedClock(now), **kwargs)


def create_signed_permit(
    token: ERC20Permit,
    *,
    private_key: str = MOCK_OWNER_PRIVATE_KEY,
    spender: str = MOCK_SPENDER_ADDRESS,
    value: int = MOCK_VALUE,
    deadline: int = MOCK_DEADLINE,
    nonce: Optional[int] = None,
) -> EVMTokenPermit:
    """
    Sign a permit against ``token``'s current domain.

    ``nonce`` defaults to the signer's current nonce on ``token``.
    """
    owner = Account.from_key(private_key).address
    domain = token.domain()
    return sign_permit(
        private_key=private_key,
        domain_name=domain.name,
        domain_version=domain.version,
        chain_id=domain.chainId,
        token=domain.verifyingContract,
        spender=spender,
        value=value,
        nonce=token.nonces(owner) if nonce is None else nonce,
        deadline=deadline,
    )
