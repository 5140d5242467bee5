"""
Per-account nonce ledger.

Each account's counter starts at 0 and only ever moves forward by one,
through ``consume``.  A signature is bound to the nonce it was made for,
so once that nonce is consumed the signature cannot be used again.
"""

import threading
from typing import Dict, Protocol

from ..utils import logger, to_address, UINT256_MAX


class NonceCapability(Protocol):
    """The nonce operations the permit flow depends on."""

    def current_nonce(self, account: str) -> int:
        ...

    def consume(self, account: str) -> int:
        ...


class NonceLedger:
    """
    Canonical ``NonceCapability`` implementation backed by a dict.

    ``consume`` reads and increments under a lock, so concurrent callers
    never observe the same value or an intermediate state.  Counters wrap
    at 2**256.
    """

    def __init__(self):
        self._nonces: Dict[str, int] = {}
        self._lock = threading.Lock()

    def current_nonce(self, account: str) -> int:
        return self._nonces.get(to_address(account), 0)

    def consume(self, account: str) -> int:
        """
        Return the account's current nonce and advance it by one.

        Returns:
            The pre-increment value.
        """
        account = to_address(account)
        with self._lock:
            current = self._nonces.get(account, 0)
            self._nonces[account] = (current + 1) & UINT256_MAX
        logger.debug(f"nonce consumed: account={account} nonce={current}")
        return current
