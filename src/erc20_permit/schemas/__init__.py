from .bases import (
    CanonicalModel,
    BaseSignature,
    BasePermit,
    BaseVerificationResult,
    VerificationStatus,
)

__all__ = [
    "CanonicalModel",
    "BaseSignature",
    "BasePermit",
    "BaseVerificationResult",
    "VerificationStatus",
]
