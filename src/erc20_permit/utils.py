"""
Shared helpers: package logger, error context and EVM value coercion.
"""

import logging
import sys
import traceback
from typing import Optional, Union

from eth_utils import to_bytes
from web3 import Web3

logger = logging.getLogger("erc20_permit")

UINT256_MAX = 2**256 - 1
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


def setup_logger(level: Union[str, int] = "INFO", fmt: Optional[str] = None) -> logging.Logger:
    """
    Attach a stream handler to the package logger and set its level.

    Calling this more than once replaces the previous handler instead of
    stacking duplicates.

    Args:
        level: Logging level name (``"DEBUG"``, ``"INFO"``, ...) or number.
        fmt:   Optional ``logging.Formatter`` format string.

    Returns:
        The configured package logger.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper())

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(fmt or "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger


def error_context() -> str:
    """
    Describe where the exception currently being handled was raised.

    Returns:
        ``"<file>:<line> in <function>"`` for the innermost frame, or an empty
        string when called outside an ``except`` block.
    """
    _, _, tb = sys.exc_info()
    if tb is None:
        return ""
    frame = traceback.extract_tb(tb)[-1]
    return f"{frame.filename}:{frame.lineno} in {frame.name}"


def to_address(value: str) -> str:
    """
    Normalise an EVM address to its EIP-55 checksum form.

    Raises:
        ValueError: If ``value`` is not a 20-byte hex address.
    """
    if not isinstance(value, str) or not Web3.is_address(value):
        raise ValueError(f"Invalid EVM address: {value!r}")
    return Web3.to_checksum_address(value)


def validate_uint256(name: str, value: int) -> int:
    """Return ``value`` if it fits in a uint256, else raise ``ValueError``."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0 or value > UINT256_MAX:
        raise ValueError(f"{name} out of uint256 range: {value}")
    return value


def hex_to_bytes32(hexstr: str) -> bytes:
    return to_bytes(hexstr=hexstr.replace("0x", "").rjust(64, "0"))
