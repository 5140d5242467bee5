"""
ERC-20 Balance and Allowance Ledger

In-memory bookkeeping for a fungible token: balances, allowances, total
supply and an append-only event log.  Callers pass the acting account
explicitly (``sender`` for ``transfer``, ``spender`` for
``transfer_from``) since there is no transaction context.

All amounts are uint256; values outside ``[0, 2**256)`` raise
``ValueError``.  An allowance of ``2**256 - 1`` is treated as infinite and
is not decreased by ``transfer_from``.
"""

from typing import Dict, List, Tuple

from .events import TransferEvent, ApprovalEvent, LedgerEvent
from ..engine.exceptions import (
    InsufficientFundsError,
    InsufficientAllowanceError,
    InvalidAddressError,
)
from ..utils import logger, to_address, validate_uint256, UINT256_MAX, ZERO_ADDRESS


class ERC20Ledger:
    def __init__(self, name: str, symbol: str, decimals: int = 18):
        self.name = name
        self.symbol = symbol
        self.decimals = decimals
        self.total_supply = 0
        self.events: List[LedgerEvent] = []
        self._balances: Dict[str, int] = {}
        self._allowances: Dict[Tuple[str, str], int] = {}

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def balance_of(self, account: str) -> int:
        return self._balances.get(to_address(account), 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get((to_address(owner), to_address(spender)), 0)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def mint(self, to: str, amount: int) -> None:
        to = to_address(to)
        if to == ZERO_ADDRESS:
            raise InvalidAddressError("receiver", to)
        self._update(ZERO_ADDRESS, to, validate_uint256("amount", amount))

    def burn(self, account: str, amount: int) -> None:
        account = to_address(account)
        if account == ZERO_ADDRESS:
            raise InvalidAddressError("sender", account)
        self._update(account, ZERO_ADDRESS, validate_uint256("amount", amount))

    def transfer(self, sender: str, to: str, amount: int) -> None:
        self._transfer(to_address(sender), to_address(to), validate_uint256("amount", amount))

    def approve(self, owner: str, spender: str, amount: int) -> None:
        """
        Set ``spender``'s allowance over ``owner``'s tokens to ``amount``.

        The previous allowance is overwritten, not added to.
        """
        owner = to_address(owner)
        spender = to_address(spender)
        amount = validate_uint256("amount", amount)
        if owner == ZERO_ADDRESS:
            raise InvalidAddressError("approver", owner)
        if spender == ZERO_ADDRESS:
            raise InvalidAddressError("spender", spender)

        self._allowances[(owner, spender)] = amount
        self.events.append(ApprovalEvent(owner=owner, spender=spender, value=amount))
        logger.debug(f"approval: owner={owner} spender={spender} value={amount}")

    def transfer_from(self, spender: str, owner: str, to: str, amount: int) -> None:
        """
        Move ``amount`` from ``owner`` to ``to`` using ``spender``'s allowance.

        Raises:
            InsufficientAllowanceError: If the allowance is below ``amount``.
            InsufficientFundsError: If ``owner``'s balance is below ``amount``.
        """
        spender = to_address(spender)
        owner = to_address(owner)
        amount = validate_uint256("amount", amount)

        current = self.allowance(owner, spender)
        if current != UINT256_MAX and current < amount:
            raise InsufficientAllowanceError(spender, current, amount)

        self._transfer(owner, to_address(to), amount)

        if current != UINT256_MAX:
            self._allowances[(owner, spender)] = current - amount

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _transfer(self, sender: str, to: str, amount: int) -> None:
        if sender == ZERO_ADDRESS:
            raise InvalidAddressError("sender", sender)
        if to == ZERO_ADDRESS:
            raise InvalidAddressError("receiver", to)
        self._update(sender, to, amount)

    def _update(self, sender: str, to: str, amount: int) -> None:
        if sender == ZERO_ADDRESS:
            if self.total_supply + amount > UINT256_MAX:
                raise ValueError("total supply would exceed uint256")
            self.total_supply += amount
        else:
            balance = self._balances.get(sender, 0)
            if balance < amount:
                raise InsufficientFundsError(sender, balance, amount)
            self._balances[sender] = balance - amount

        if to == ZERO_ADDRESS:
            self.total_supply -= amount
        else:
            self._balances[to] = self._balances.get(to, 0) + amount

        self.events.append(TransferEvent(sender=sender, receiver=to, value=amount))
        logger.debug(f"transfer: from={sender} to={to} value={amount}")
