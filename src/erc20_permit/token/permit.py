"""
EIP-2612 Permit Token

``ERC20Permit`` combines an ``ERC20Ledger`` with a nonce ledger and the
token's EIP-712 domain so that an owner can grant an allowance by signing
a message off-chain instead of calling ``approve`` themselves.

Permit flow
-----------
1. ``now > deadline``                   -> ``ExpiredSignatureError``
2. ``n = nonces.consume(owner)``
3. ``digest = keccak(0x1901 || DOMAIN_SEPARATOR || structHash(owner, spender, value, n, deadline))``
4. ``signer = recover(digest, signature)`` (recovery errors propagate)
5. ``signer != owner``                  -> ``InvalidSignerError``
6. ``allowance[owner][spender] = value``

Step 2 happens before the signature is checked, so a rejected permit
still advances the owner's nonce and invalidates any other permit the
owner signed for that nonce.  Wallets should sign a permit only for
immediate submission.

Each call runs under the token's lock; no two permits, and no permit and
ledger mutation, interleave.

Domain separator
----------------
Recomputed on every call from the current chain id by default, so a chain
id change (e.g. after a fork) is picked up immediately.  With
``cache_domain_separator`` enabled the separator is cached together with
the chain id it was built for and rebuilt whenever that chain id changes.
"""

import threading
from typing import Callable, List, Optional, Tuple, Union

from ..config import TokenSettings, load_settings
from ..engine.exceptions import (
    ExpiredSignatureError,
    InvalidSignerError,
    PermitVerificationError,
    SignatureError,
)
from ..evm.constants import EIP712_DOMAIN_FIELDS
from ..evm.recovery import SignatureLike, recover
from ..evm.schemas import EVMTokenPermit
from ..evm.standards import EIP712Domain
from ..evm.typed_data import domain_separator, permit_struct_hash, typed_data_digest
from ..utils import logger, setup_logger, to_address, validate_uint256
from .clock import Clock, SystemClock
from .ledger import ERC20Ledger
from .nonces import NonceCapability, NonceLedger

ChainIdSource = Union[int, Callable[[], int]]


class ERC20Permit:
    """
    Permit-enabled ERC-20 token.

    Args:
        settings: Token metadata and EIP-712 domain inputs.
        clock:    Time source for deadline checks; defaults to ``SystemClock``.
        nonces:   Nonce capability; defaults to a fresh ``NonceLedger``.
        ledger:   Balance/allowance ledger; defaults to a fresh ``ERC20Ledger``.
        chain_id: Chain id or zero-argument callable returning it; defaults
                  to ``settings.chain_id``.

    Example::

        token = ERC20Permit(TokenSettings(
            name="My Token", symbol="MTKN", chain_id=1,
            verifying_contract="0x...",
        ))
        token.permit(owner, spender, 100, deadline, signature)
        token.allowance(owner, spender)  # 100
    """

    def __init__(
        self,
        settings: TokenSettings,
        *,
        clock: Optional[Clock] = None,
        nonces: Optional[NonceCapability] = None,
        ledger: Optional[ERC20Ledger] = None,
        chain_id: Optional[ChainIdSource] = None,
    ):
        self.settings = settings
        self.clock = clock or SystemClock()
        self.ledger = ledger or ERC20Ledger(settings.name, settings.symbol, settings.decimals)
        self._nonces = nonces or NonceLedger()
        self._chain_id_source = chain_id if chain_id is not None else settings.chain_id
        self._cached_separator: Optional[Tuple[int, bytes]] = None
        self._lock = threading.RLock()

    @classmethod
    def from_env(cls, env_file=None, **kwargs) -> "ERC20Permit":
        """Load ``TokenSettings`` from the environment, configure logging at
        ``settings.log_level`` and build the token."""
        settings = load_settings(env_file)
        setup_logger(settings.log_level)
        return cls(settings, **kwargs)

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self.settings.name

    @property
    def symbol(self) -> str:
        return self.settings.symbol

    @property
    def decimals(self) -> int:
        return self.settings.decimals

    @property
    def address(self) -> str:
        return self.settings.verifying_contract

    @property
    def total_supply(self) -> int:
        return self.ledger.total_supply

    def chain_id(self) -> int:
        if callable(self._chain_id_source):
            return self._chain_id_source()
        return self._chain_id_source

    # ------------------------------------------------------------------
    # EIP-712 domain
    # ------------------------------------------------------------------

    def domain(self) -> EIP712Domain:
        return EIP712Domain(
            name=self.settings.name,
            version=self.settings.version,
            chainId=self.chain_id(),
            verifyingContract=self.settings.verifying_contract,
        )

    def domain_separator(self) -> bytes:
        """
        Return the token's EIP-712 domain separator (``DOMAIN_SEPARATOR``).

        Matches what an external signer computes from ``{name, version,
        chainId, verifyingContract}``.
        """
        domain = self.domain()
        if not self.settings.cache_domain_separator:
            return domain_separator(domain)

        cached = self._cached_separator
        if cached is not None and cached[0] == domain.chainId:
            return cached[1]

        separator = domain_separator(domain)
        self._cached_separator = (domain.chainId, separator)
        logger.debug(f"domain separator cached for chain {domain.chainId}: 0x{separator.hex()}")
        return separator

    DOMAIN_SEPARATOR = domain_separator

    def eip712_domain(self) -> Tuple[bytes, str, str, int, str, bytes, List[int]]:
        """
        EIP-5267 domain description.

        Returns:
            ``(fields, name, version, chainId, verifyingContract, salt,
            extensions)``; ``fields`` is ``0x0f`` since no salt is used.
        """
        domain = self.domain()
        return (
            EIP712_DOMAIN_FIELDS,
            domain.name,
            domain.version,
            domain.chainId,
            domain.verifyingContract,
            bytes(32),
            [],
        )

    # ------------------------------------------------------------------
    # Permit
    # ------------------------------------------------------------------

    def nonces(self, owner: str) -> int:
        return self._nonces.current_nonce(to_address(owner))

    def permit(
        self,
        owner: str,
        spender: str,
        value: int,
        deadline: int,
        signature: SignatureLike,
    ) -> None:
        """
        Set ``spender``'s allowance over ``owner``'s tokens from a signed permit.

        Args:
            owner:     Claimed signer and token owner.
            spender:   Address receiving the allowance.
            value:     New allowance (overwrites, does not add).
            deadline:  Last Unix second at which the permit is accepted.
            signature: 65-byte ``r||s||v``, 64-byte ``r||vs`` (bytes or hex),
                       ``(v, r, s)``, ``(r, vs)`` or ``EVMECDSASignature``.

        Raises:
            ExpiredSignatureError: ``deadline`` is before the current time.
            InvalidSignatureLengthError: Serialized signature of wrong length.
            InvalidSignatureSError: High-s (malleable) signature.
            InvalidSignatureError: Signature hex or words do not decode, or the
                signer could not be recovered.
            InvalidSignerError: Recovered signer is not ``owner``.
        """
        owner = to_address(owner)
        spender = to_address(spender)
        validate_uint256("value", value)
        validate_uint256("deadline", deadline)

        with self._lock:
            try:
                now = self.clock.now()
                if now > deadline:
                    raise ExpiredSignatureError(deadline, now)

                nonce = self._nonces.consume(owner)

                struct_hash = permit_struct_hash(owner, spender, value, nonce, deadline)
                digest = typed_data_digest(self.domain_separator(), struct_hash)
                logger.debug(f"permit digest: owner={owner} nonce={nonce} digest=0x{digest.hex()}")

                signer = recover(digest, signature)
                if signer != owner:
                    raise InvalidSignerError(signer, owner)
            except (SignatureError, PermitVerificationError) as e:
                logger.warning(f"permit rejected: owner={owner} spender={spender} reason={e}")
                raise

            self.ledger.approve(owner, spender, value)

        logger.info(f"permit accepted: owner={owner} spender={spender} value={value} nonce={nonce}")

    def permit_vrs(
        self,
        owner: str,
        spender: str,
        value: int,
        deadline: int,
        v: int,
        r: Union[int, bytes],
        s: Union[int, bytes],
    ) -> None:
        """``permit`` taking split ``v, r, s`` like the Solidity entry point."""
        if isinstance(r, bytes):
            r = int.from_bytes(r, "big")
        if isinstance(s, bytes):
            s = int.from_bytes(s, "big")
        self.permit(owner, spender, value, deadline, (v, r, s))

    def submit_permit(self, permit: EVMTokenPermit) -> None:
        """
        Apply a signed ``EVMTokenPermit``.

        The permit's ``nonce`` is informational; the token always uses the
        owner's current nonce when rebuilding the digest.
        """
        permit.validate_structure()
        self.permit(permit.owner, permit.spender, permit.value, permit.deadline, permit.signature)

    # ------------------------------------------------------------------
    # ERC-20 surface
    # ------------------------------------------------------------------

    def balance_of(self, account: str) -> int:
        return self.ledger.balance_of(account)

    def allowance(self, owner: str, spender: str) -> int:
        return self.ledger.allowance(owner, spender)

    def mint(self, to: str, amount: int) -> None:
        with self._lock:
            self.ledger.mint(to, amount)

    def burn(self, account: str, amount: int) -> None:
        with self._lock:
            self.ledger.burn(account, amount)

    def transfer(self, sender: str, to: str, amount: int) -> None:
        with self._lock:
            self.ledger.transfer(sender, to, amount)

    def approve(self, owner: str, spender: str, amount: int) -> None:
        with self._lock:
            self.ledger.approve(owner, spender, amount)

    def transfer_from(self, spender: str, owner: str, to: str, amount: int) -> None:
        with self._lock:
            self.ledger.transfer_from(spender, owner, to, amount)
