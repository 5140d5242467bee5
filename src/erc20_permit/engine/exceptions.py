"""
Exception and Error Definitions Module

Defines the exception hierarchy for signature recovery, permit
authorization and token ledger bookkeeping. All exceptions inherit from
the project ``BaseException`` for unified exception handling.

Every error is terminal: the operation that raised it is aborted and the
caller must not retry it as-is.

Exception Hierarchy:
    BaseException (root)
    ├── SignatureError
    │   ├── InvalidSignatureError
    │   ├── InvalidSignatureLengthError
    │   └── InvalidSignatureSError
    ├── PermitVerificationError
    │   ├── ExpiredSignatureError
    │   └── InvalidSignerError
    ├── LedgerError
    │   ├── InsufficientFundsError
    │   ├── InsufficientAllowanceError
    │   └── InvalidAddressError
    └── ConfigurationError
"""


class BaseException(Exception):
    """
    Root exception class for all project-specific exceptions.

    All custom exceptions should inherit from this class to enable
    unified exception handling and centralized error processing.
    """
    pass


class SignatureError(BaseException):
    """
    Base exception for ECDSA signature parsing and recovery failures.

    Raised by ``erc20_permit.evm.recovery`` and propagated unchanged by the
    permit flow.
    """
    pass


class InvalidSignatureError(SignatureError):
    """
    Raised when a signer cannot be recovered from a signature.

    This includes scenarios such as:
    - Recovery id other than 27 or 28
    - ``r`` or ``s`` equal to zero or not below the curve order
    - ``r`` not being the x coordinate of a curve point
    - Recovery yielding the zero address
    """

    def __init__(self, message: str = "Invalid signature"):
        super().__init__(message)


class InvalidSignatureLengthError(SignatureError):
    """
    Raised when a serialized signature is neither 65 nor 64 bytes long.

    Attributes:
        length: Byte length of the rejected signature
    """

    def __init__(self, length: int):
        self.length = length
        super().__init__(f"Invalid signature length: {length}")


class InvalidSignatureSError(SignatureError):
    """
    Raised when ``s`` lies in the upper half of the secp256k1 order.

    Such signatures are malleable: ``(r, n - s)`` verifies for the same
    digest, so only the low-s form is accepted.

    Attributes:
        s: The rejected ``s`` value
    """

    def __init__(self, s: int):
        self.s = s
        super().__init__(f"Invalid signature 's' value: {hex(s)}")


class PermitVerificationError(BaseException):
    """
    Base exception for permit authorization failures.

    Parent class for all errors raised by the permit flow itself, as
    opposed to the recovery errors it propagates.
    """
    pass


class ExpiredSignatureError(PermitVerificationError):
    """
    Raised when a permit is submitted after its deadline.

    Attributes:
        deadline: The expired permit deadline
        current_time: Clock reading at submission
    """

    def __init__(self, deadline: int, current_time: int):
        self.deadline = deadline
        self.current_time = current_time
        super().__init__(f"Expired signature: deadline {deadline} < now {current_time}")


class InvalidSignerError(PermitVerificationError):
    """
    Raised when the recovered signer is not the claimed owner.

    A replayed permit lands here: its digest embeds a nonce that has
    already been consumed, so recovery yields an unrelated address.

    Attributes:
        signer: Address recovered from the signature
        owner: Address the permit claims to be from
    """

    def __init__(self, signer: str, owner: str):
        self.signer = signer
        self.owner = owner
        super().__init__(f"Invalid signer: recovered {signer}, expected {owner}")


class LedgerError(BaseException):
    """
    Base exception for balance and allowance bookkeeping failures.
    """
    pass


class InsufficientFundsError(LedgerError):
    """
    Raised when an account balance is below the amount being moved.

    Attributes:
        sender: Account being debited
        balance: Amount available
        needed: Amount required
    """

    def __init__(self, sender: str, balance: int, needed: int):
        self.sender = sender
        self.balance = balance
        self.needed = needed
        super().__init__(f"Insufficient balance for {sender}: {balance} < {needed}")


class InsufficientAllowanceError(LedgerError):
    """
    Raised when a spender's allowance is below the amount being moved.

    Attributes:
        spender: Account spending the allowance
        allowance: Amount approved
        needed: Amount required
    """

    def __init__(self, spender: str, allowance: int, needed: int):
        self.spender = spender
        self.allowance = allowance
        self.needed = needed
        super().__init__(f"Insufficient allowance for {spender}: {allowance} < {needed}")


class InvalidAddressError(LedgerError):
    """
    Raised when the zero address is used where a real account is required.

    Attributes:
        role: Which argument was invalid (``"sender"``, ``"receiver"``,
              ``"approver"`` or ``"spender"``)
        address: The rejected address
    """

    def __init__(self, role: str, address: str):
        self.role = role
        self.address = address
        super().__init__(f"Invalid {role}: {address}")


class ConfigurationError(BaseException):
    """
    Raised when configuration is missing or invalid.

    This includes scenarios such as:
    - Missing required configuration keys
    - Invalid configuration values
    """
    pass
