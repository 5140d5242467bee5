"""
Signing helpers, signature model encodings and off-chain verification.
"""

import pytest
from pydantic import ValidationError

from erc20_permit.evm.constants import SECP256K1_N
from erc20_permit.evm.recovery import recover
from erc20_permit.evm.schemas import EVMECDSASignature, EVMTokenPermit
from erc20_permit.evm.signatures import build_permit_typed_data, sign_permit
from erc20_permit.evm.standards import EIP712Domain
from erc20_permit.evm.typed_data import permit_digest
from erc20_permit.evm.verifies import verify_permit
from erc20_permit.schemas.bases import VerificationStatus

from test_mocks import (
    MOCK_CHAIN_ID,
    MOCK_DEADLINE,
    MOCK_NOW,
    MOCK_OTHER_PRIVATE_KEY,
    MOCK_OWNER_ADDRESS,
    MOCK_OWNER_PRIVATE_KEY,
    MOCK_SPENDER_ADDRESS,
    MOCK_TOKEN_ADDRESS,
    MOCK_TOKEN_NAME,
    MOCK_TOKEN_VERSION,
)

DOMAIN = EIP712Domain(
    name=MOCK_TOKEN_NAME,
    version=MOCK_TOKEN_VERSION,
    chainId=MOCK_CHAIN_ID,
    verifyingContract=MOCK_TOKEN_ADDRESS,
)


def _sign(private_key=MOCK_OWNER_PRIVATE_KEY, nonce=0, value=100) -> EVMTokenPermit:
    return sign_permit(
        private_key=private_key,
        domain_name=MOCK_TOKEN_NAME,
        domain_version=MOCK_TOKEN_VERSION,
        chain_id=MOCK_CHAIN_ID,
        token=MOCK_TOKEN_ADDRESS,
        spender=MOCK_SPENDER_ADDRESS,
        value=value,
        nonce=nonce,
        deadline=MOCK_DEADLINE,
    )


def _verify(permit: EVMTokenPermit, signature=None, nonce=0, current_time=MOCK_NOW):
    return verify_permit(
        domain=DOMAIN,
        owner=MOCK_OWNER_ADDRESS,
        spender=permit.spender,
        value=permit.value,
        nonce=nonce,
        deadline=permit.deadline,
        signature=signature if signature is not None else permit.signature,
        current_time=current_time,
    )


class TestBuildTypedData:
    def test_to_dict_layout(self):
        typed_data = build_permit_typed_data(
            domain_name=MOCK_TOKEN_NAME,
            domain_version=MOCK_TOKEN_VERSION,
            chain_id=MOCK_CHAIN_ID,
            token=MOCK_TOKEN_ADDRESS.lower(),
            owner=MOCK_OWNER_ADDRESS,
            spender=MOCK_SPENDER_ADDRESS,
            value=1,
            nonce=2,
            deadline=3,
        )
        payload = typed_data.to_dict()

        assert payload["primaryType"] == "Permit"
        assert [f["name"] for f in payload["types"]["Permit"]] == ["owner", "spender", "value", "nonce", "deadline"]
        assert payload["domain"] == {
            "name": MOCK_TOKEN_NAME,
            "version": MOCK_TOKEN_VERSION,
            "chainId": MOCK_CHAIN_ID,
            "verifyingContract": MOCK_TOKEN_ADDRESS,
        }
        assert payload["message"]["nonce"] == 2


class TestSignPermit:
    def test_fields(self):
        permit = _sign(nonce=5)
        assert permit.owner == MOCK_OWNER_ADDRESS
        assert permit.spender == MOCK_SPENDER_ADDRESS
        assert permit.token == MOCK_TOKEN_ADDRESS
        assert permit.nonce == 5
        assert permit.permit_type == "EIP2612"
        assert permit.validate_structure()

    def test_signature_recovers_owner(self):
        permit = _sign()
        digest = permit_digest(DOMAIN, build_permit_typed_data(
            domain_name=MOCK_TOKEN_NAME,
            domain_version=MOCK_TOKEN_VERSION,
            chain_id=MOCK_CHAIN_ID,
            token=MOCK_TOKEN_ADDRESS,
            owner=MOCK_OWNER_ADDRESS,
            spender=MOCK_SPENDER_ADDRESS,
            value=100,
            nonce=0,
            deadline=MOCK_DEADLINE,
        ).message)
        assert recover(digest, permit.signature) == MOCK_OWNER_ADDRESS


class TestSignatureModel:
    def test_packed_and_compact_lengths(self):
        sig = _sign().signature
        assert len(sig.to_packed_hex()) == 132
        assert len(sig.to_compact_hex()) == 130
        assert len(sig.to_bytes()) == 65

    def test_packed_layout(self):
        sig = EVMECDSASignature.from_vrs(28, 1, 2)
        raw = sig.to_bytes()
        assert raw[:32] == (1).to_bytes(32, "big")
        assert raw[32:64] == (2).to_bytes(32, "big")
        assert raw[64] == 28

    def test_compact_packs_parity_bit(self):
        sig = EVMECDSASignature.from_vrs(28, 1, 2)
        vs = int(sig.to_compact_hex()[66:], 16)
        assert vs >> 255 == 1
        assert vs & ((1 << 255) - 1) == 2

    @pytest.mark.parametrize("encode", ["to_packed_hex", "to_compact_hex"])
    def test_from_hex_inverts_encoding(self, encode):
        sig = _sign().signature
        parsed = EVMECDSASignature.from_hex(getattr(sig, encode)())
        assert parsed.to_vrs() == sig.to_vrs()

    def test_from_hex_rejects_bad_length(self):
        with pytest.raises(ValueError):
            EVMECDSASignature.from_hex("0x" + "00" * 10)

    def test_v_out_of_range(self):
        with pytest.raises(ValidationError):
            EVMECDSASignature(v=29, r="0x" + "a" * 64, s="0x" + "b" * 64)

    def test_validate_format_rejects_short_r(self):
        sig = EVMECDSASignature(v=27, r="0x" + "a" * 10, s="0x" + "b" * 64)
        with pytest.raises(ValueError):
            sig.validate_format()

    def test_canonical_json_is_stable(self):
        sig = EVMECDSASignature.from_vrs(27, 1, 2)
        assert sig.to_canonical_json() == sig.to_canonical_json()
        assert '"v":27' in sig.to_canonical_json()


class TestVerifyPermit:
    def test_success(self):
        permit = _sign()
        result = _verify(permit)
        assert result.is_success()
        assert result.signer == MOCK_OWNER_ADDRESS
        assert result.get_error_message() is None

    def test_expired(self):
        permit = _sign()
        result = _verify(permit, current_time=MOCK_DEADLINE + 1)
        assert result.status == VerificationStatus.EXPIRED
        assert not result.is_success()
        assert result.error_details["deadline"] == MOCK_DEADLINE

    def test_deadline_equal_to_now_is_valid(self):
        permit = _sign()
        assert _verify(permit, current_time=MOCK_DEADLINE).is_success()

    def test_wrong_nonce_is_wrong_signer(self):
        permit = _sign(nonce=0)
        result = _verify(permit, nonce=1)
        assert result.status == VerificationStatus.INVALID_SIGNER
        assert result.signer != MOCK_OWNER_ADDRESS

    def test_other_key_is_wrong_signer(self):
        permit = _sign(private_key=MOCK_OTHER_PRIVATE_KEY)
        result = _verify(permit)
        assert result.status == VerificationStatus.INVALID_SIGNER

    def test_high_s_is_invalid_signature(self):
        v, r, s = _sign().signature.to_vrs()
        result = _verify(_sign(), signature=(55 - v, r, SECP256K1_N - s))
        assert result.status == VerificationStatus.INVALID_SIGNATURE
        assert result.error_details == {"error": "InvalidSignatureSError"}
        assert "Verification failed" in result.get_error_message()
