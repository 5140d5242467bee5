from .exceptions import (
    BaseException,
    SignatureError,
    InvalidSignatureError,
    InvalidSignatureLengthError,
    InvalidSignatureSError,
    PermitVerificationError,
    ExpiredSignatureError,
    InvalidSignerError,
    LedgerError,
    InsufficientFundsError,
    InsufficientAllowanceError,
    InvalidAddressError,
    ConfigurationError,
)

__all__ = [
    "BaseException",
    "SignatureError",
    "InvalidSignatureError",
    "InvalidSignatureLengthError",
    "InvalidSignatureSError",
    "PermitVerificationError",
    "ExpiredSignatureError",
    "InvalidSignerError",
    "LedgerError",
    "InsufficientFundsError",
    "InsufficientAllowanceError",
    "InvalidAddressError",
    "ConfigurationError",
]
