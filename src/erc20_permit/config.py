"""
Token Configuration

``TokenSettings`` holds everything a permit-enabled token needs to know
about itself: ERC-20 metadata and the EIP-712 domain inputs.  Settings can
be built directly or loaded from the environment (optionally seeded from a
``.env`` file) with ``load_settings``.

Environment variables (prefix ``ERC20_PERMIT_``):

    NAME                    required
    SYMBOL                  required
    CHAIN_ID                required
    VERIFYING_CONTRACT      required
    DECIMALS                default 18
    VERSION                 default "1"
    CACHE_DOMAIN_SEPARATOR  default false
    LOG_LEVEL               default INFO
"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

import dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from .engine.exceptions import ConfigurationError
from .utils import error_context, logger, to_address

ENV_PREFIX = "ERC20_PERMIT_"

_REQUIRED_KEYS = ("NAME", "SYMBOL", "CHAIN_ID", "VERIFYING_CONTRACT")
_TRUE_VALUES = {"1", "true", "yes", "on"}


class TokenSettings(BaseModel):
    """Token metadata and EIP-712 domain configuration."""
    name: str = Field(..., description="Token name, also the EIP-712 domain name")
    symbol: str = Field(..., description="Token ticker symbol")
    decimals: int = Field(default=18, ge=0, le=255, description="Token decimals")
    version: str = Field(default="1", description="EIP-712 domain version")
    chain_id: int = Field(..., ge=1, description="EVM network ID")
    verifying_contract: str = Field(..., description="Token address, the EIP-712 verifyingContract")
    cache_domain_separator: bool = Field(
        default=False,
        description="Cache the domain separator per chain id instead of recomputing it on every call",
    )
    log_level: str = Field(default="INFO", description="Package log level")

    @field_validator("verifying_contract")
    @classmethod
    def _checksum_contract(cls, value: str) -> str:
        return to_address(value)

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level


def load_settings(
    env_file: Optional[Union[str, Path]] = None,
    prefix: str = ENV_PREFIX,
) -> TokenSettings:
    """
    Build ``TokenSettings`` from environment variables.

    Args:
        env_file: Optional ``.env`` path loaded first; variables already set
                  in the process environment take precedence.
        prefix:   Environment variable prefix.

    Raises:
        ConfigurationError: If the env file is missing, a required key is
                            unset, or a value fails validation.
    """
    if env_file is not None:
        env_path = Path(env_file)
        if not env_path.exists():
            raise ConfigurationError(f"Config path does not exist: {env_path}")
        dotenv.load_dotenv(dotenv_path=env_path)

    def get(key: str, default: Optional[str] = None) -> Optional[str]:
        return os.getenv(prefix + key, default)

    missing = [prefix + key for key in _REQUIRED_KEYS if not get(key)]
    if missing:
        raise ConfigurationError(f"Missing required configuration keys: {', '.join(missing)}")

    try:
        return TokenSettings(
            name=get("NAME"),
            symbol=get("SYMBOL"),
            decimals=int(get("DECIMALS", "18")),
            version=get("VERSION", "1"),
            chain_id=int(get("CHAIN_ID")),
            verifying_contract=get("VERIFYING_CONTRACT"),
            cache_domain_separator=get("CACHE_DOMAIN_SEPARATOR", "false").lower() in _TRUE_VALUES,
            log_level=get("LOG_LEVEL", "INFO"),
        )
    except (ValidationError, ValueError) as e:
        logger.error(f"Invalid configuration ({error_context()}): {e}")
        raise ConfigurationError(f"Invalid configuration: {e}") from e
