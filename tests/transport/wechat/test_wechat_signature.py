"""
WeChat Handshake Signature Tests

signature == sha1("".join(sorted([token, timestamp, nonce]))).hexdigest()
"""

import hashlib

import pytest

from transport.wechat.security import (
    SignatureVerificationError,
    check_signature,
    compute_signature,
    verify_webhook_challenge,
)


def reference_signature(token, timestamp, nonce):
    return hashlib.sha1("".join(sorted([token, timestamp, nonce])).encode()).hexdigest()


class TestComputeSignature:
    """Deterministic sort-concatenate-hash."""

    def test_matches_reference(self):
        assert compute_signature("test_token", "1700000000", "42") == \
            reference_signature("test_token", "1700000000", "42")

    def test_order_independent(self):
        """Sorting makes argument order irrelevant."""
        assert compute_signature("a", "b", "c") == compute_signature("c", "a", "b")

    def test_known_value(self):
        # sorted(["token", "123", "abc"]) -> "123abctoken"
        expected = hashlib.sha1(b"123abctoken").hexdigest()
        assert compute_signature("token", "123", "abc") == expected


class TestCheckSignature:
    """Match, mismatch and fail-closed cases."""

    def test_valid_signature(self):
        sig = reference_signature("test_token", "1700000000", "nonce")
        assert check_signature("test_token", sig, "1700000000", "nonce") is True

    def test_invalid_signature(self):
        assert check_signature("test_token", "deadbeef", "1700000000", "nonce") is False

    def test_wrong_token(self):
        sig = reference_signature("other_token", "1700000000", "nonce")
        assert check_signature("test_token", sig, "1700000000", "nonce") is False

    @pytest.mark.parametrize("token,timestamp,nonce", [
        ("", "1700000000", "nonce"),
        ("test_token", "", "nonce"),
        ("test_token", "1700000000", ""),
    ])
    def test_empty_inputs_fail_closed(self, token, timestamp, nonce):
        # Even a signature computed over the empty value is rejected
        sig = reference_signature(token, timestamp, nonce)
        assert check_signature(token, sig, timestamp, nonce) is False

    def test_empty_signature(self):
        assert check_signature("test_token", "", "1700000000", "nonce") is False

    @pytest.mark.parametrize("signature", ["é", "签名", "a" * 39 + "é"])
    def test_non_ascii_signature_is_mismatch(self, signature):
        assert check_signature("test_token", signature, "1700000000", "nonce") is False


class TestVerifyWebhookChallenge:
    """Echo on success, error on mismatch."""

    def test_returns_echostr_verbatim(self):
        sig = reference_signature("test_token", "1700000000", "nonce")
        echo = "7391283749 echo"

        assert verify_webhook_challenge("test_token", sig, "1700000000", "nonce", echo) == echo

    def test_mismatch_raises(self):
        with pytest.raises(SignatureVerificationError):
            verify_webhook_challenge("test_token", "bad", "1700000000", "nonce", "echo")
