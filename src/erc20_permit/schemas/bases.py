"""
Base Schema Models

Shared pydantic bases for signatures, permits, verification results and
ledger events.

    - CanonicalModel: deterministic JSON (sorted keys, compact separators)
    - BaseSignature: signature components of some signing standard
    - BasePermit: signed allowance grant
    - BaseVerificationResult: outcome of a non-mutating permit check
"""

import json
from abc import ABC
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class CanonicalModel(BaseModel):
    """
    Model whose JSON form is byte-stable, so two equal models always log
    and hash identically.

    Example:
        EVMECDSASignature.from_vrs(27, 1, 2).to_canonical_json()
    """

    model_config = ConfigDict(populate_by_name=True)

    def to_canonical_json(self) -> str:
        return json.dumps(
            self.model_dump(mode="json"),
            separators=(",", ":"),
            sort_keys=True,
            ensure_ascii=False,
        )

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()


class BaseSignature(CanonicalModel, ABC):
    """Signature components; subclasses fix ``signature_type``."""

    signature_type: str = Field(..., description="Signing standard, e.g. EIP2612")
    created_at: datetime = Field(default_factory=datetime.now, description="When the object was built")

    def validate_format(self) -> bool:
        """Return True or raise ``ValueError`` naming the bad component."""
        raise NotImplementedError


class BasePermit(CanonicalModel, ABC):
    """
    Signed message letting ``spender`` move ``owner``'s tokens without an
    ``approve`` transaction from the owner.
    """

    permit_type: str = Field(..., description="Permit standard, e.g. EIP2612")
    signature: Optional[BaseSignature] = Field(None, description="Owner's signature")
    created_at: datetime = Field(default_factory=datetime.now, description="When the object was built")

    def validate_structure(self) -> bool:
        """Return True or raise ``ValueError`` naming the bad field."""
        raise NotImplementedError


class VerificationStatus(str, Enum):
    SUCCESS = "success"
    INVALID_SIGNATURE = "invalid_signature"  # malformed, high-s or unrecoverable
    INVALID_SIGNER = "invalid_signer"        # recovered address is not the owner
    EXPIRED = "expired"


class BaseVerificationResult(CanonicalModel, ABC):
    """
    Result of checking a permit without applying it.

    ``is_valid`` mirrors ``status == SUCCESS``; ``error_details`` carries
    machine-readable context for failures (e.g. the exception name or the
    deadline that passed).
    """

    verification_type: str = Field(..., description="Verification family, e.g. evm")
    status: VerificationStatus = Field(..., description="Outcome")
    is_valid: bool = Field(..., description="True only on success")
    message: str = Field(..., description="Human-readable outcome")
    error_details: Optional[Dict[str, Any]] = Field(None, description="Failure context")
    verified_at: datetime = Field(default_factory=datetime.now, description="When the check ran")

    def is_success(self) -> bool:
        return self.is_valid and self.status == VerificationStatus.SUCCESS

    def get_error_message(self) -> Optional[str]:
        """
        ``None`` on success, else ``"Verification failed: <message>"`` with
        the error details appended as indented JSON.
        """
        if self.is_success():
            return None

        error_msg = f"Verification failed: {self.message}"
        if self.error_details:
            error_msg += "\nDetails: " + json.dumps(self.error_details, indent=2)
        return error_msg
