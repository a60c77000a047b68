"""Tests for qaskills/services/token_service.py: one-click unsubscribe tokens."""
import base64
import hashlib
import hmac
import re

import pytest

from qaskills.base.exception import ConfigurationError
from qaskills.services.token_service import TOKEN_MAX_AGE_MS, UnsubscribeTokenService
from tests.helpers import T0, FakeClock

DAY_MS = 24 * 60 * 60 * 1000


def b64(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def forge(payload: str, secret: str = "secret-a") -> str:
    """Token for an arbitrary payload, signed correctly."""
    sig = hmac.new(secret.encode(), payload.encode(), hashlib.sha256).digest()
    return f"{b64(payload.encode())}.{b64(sig)}"


class TestGenerate:
    def test_token_shape(self, token_service):
        token = token_service.generate_token("user_123")
        assert re.fullmatch(r"[A-Za-z0-9_-]+\.[A-Za-z0-9_-]{43}", token)

    def test_payload_is_user_and_millis(self, token_service):
        encoded, _ = token_service.generate_token("user_123").split(".")
        padded = encoded + "=" * (-len(encoded) % 4)
        assert base64.urlsafe_b64decode(padded).decode() == f"user_123:{T0}"

    def test_signature_is_hmac_sha256_of_payload(self, token_service):
        assert token_service.generate_token("user_123") == forge(f"user_123:{T0}")

    def test_missing_secret_raises_configuration_error(self, monkeypatch, clock):
        monkeypatch.delenv("UNSUBSCRIBE_SECRET", raising=False)
        monkeypatch.delenv("CRON_SECRET", raising=False)
        service = UnsubscribeTokenService(clock=clock)
        with pytest.raises(ConfigurationError):
            service.generate_token("user_123")

    def test_secret_read_on_every_call(self, monkeypatch, clock):
        service = UnsubscribeTokenService(clock=clock)
        monkeypatch.setenv("UNSUBSCRIBE_SECRET", "first")
        first = service.generate_token("user_123")
        monkeypatch.setenv("UNSUBSCRIBE_SECRET", "second")
        second = service.generate_token("user_123")
        assert first != second
        assert second.split(".")[0] == first.split(".")[0]

    def test_falls_back_to_cron_secret(self, monkeypatch, clock):
        monkeypatch.delenv("UNSUBSCRIBE_SECRET", raising=False)
        monkeypatch.setenv("CRON_SECRET", "cron-secret")
        token = UnsubscribeTokenService(clock=clock).generate_token("user_123")
        assert token == forge(f"user_123:{T0}", secret="cron-secret")


class TestVerify:
    def test_round_trip(self, token_service, clock):
        token = token_service.generate_token("user_123")
        clock.advance(1000)
        payload = token_service.verify_token(token)
        assert payload.user_id == "user_123"
        assert payload.timestamp == T0

    def test_expired_after_31_days(self, token_service, clock):
        token = token_service.generate_token("user_123")
        clock.advance(31 * DAY_MS)
        assert token_service.verify_token(token) is None

    @pytest.mark.parametrize("age, accepted", [
        (TOKEN_MAX_AGE_MS - 1, True),
        (TOKEN_MAX_AGE_MS, True),
        (TOKEN_MAX_AGE_MS + 1, False),
    ])
    def test_expiry_boundary_is_inclusive(self, token_service, clock, age, accepted):
        token = token_service.generate_token("user_123")
        clock.advance(age)
        assert (token_service.verify_token(token) is not None) is accepted

    def test_future_timestamp_is_accepted(self, token_service):
        token = forge(f"user_123:{T0 + DAY_MS}")
        assert token_service.verify_token(token).timestamp == T0 + DAY_MS

    def test_user_id_may_contain_colons(self, token_service):
        token = token_service.generate_token("org:team:42")
        payload = token_service.verify_token(token)
        assert payload.user_id == "org:team:42"
        assert payload.timestamp == T0

    def test_every_signature_character_is_checked(self, token_service):
        token = token_service.generate_token("user_123")
        encoded, signature = token.split(".")
        for i, char in enumerate(signature):
            replacement = "A" if char != "A" else "B"
            tampered = signature[:i] + replacement + signature[i + 1:]
            assert token_service.verify_token(f"{encoded}.{tampered}") is None, i

    def test_swapped_payload_is_rejected(self, token_service):
        _, signature = token_service.generate_token("user_123").split(".")
        other = b64(f"user_124:{T0}".encode())
        assert token_service.verify_token(f"{other}.{signature}") is None

    def test_extended_timestamp_is_rejected(self, token_service):
        _, signature = token_service.generate_token("user_123").split(".")
        later = b64(f"user_123:{T0 + 10 * DAY_MS}".encode())
        assert token_service.verify_token(f"{later}.{signature}") is None

    def test_secret_rotation_invalidates_tokens(self, clock):
        issued = UnsubscribeTokenService(secret_provider=lambda: "secret-a", clock=clock)
        rotated = UnsubscribeTokenService(secret_provider=lambda: "secret-b", clock=clock)
        assert rotated.verify_token(issued.generate_token("user_123")) is None

    def test_missing_secret_returns_none(self, monkeypatch, token_service, clock):
        token = token_service.generate_token("user_123")
        monkeypatch.delenv("UNSUBSCRIBE_SECRET", raising=False)
        monkeypatch.delenv("CRON_SECRET", raising=False)
        assert UnsubscribeTokenService(clock=clock).verify_token(token) is None

    @pytest.mark.parametrize("token", [
        "",
        "no-dot-at-all",
        "a.b.c",
        ".signature",
        "payload.",
        ".",
        "!!!!.signature",
        "dXNlcl8xMjM6MTcwMDAwMDAwMDAwMA==.sig",
        "a.sig",
        " dXNlcl8xMjM6MTcwMDAwMDAwMDAwMA.sig",
        "/w.sig",
    ])
    def test_malformed_tokens_return_none(self, token_service, token):
        assert token_service.verify_token(token) is None

    @pytest.mark.parametrize("payload", [
        "user_123",
        "user_123:",
        "user_123:abc",
        "user_123:12a",
        "user_123:-5",
        "user_123: 1700000000000",
        "user_123:1700000000000\n",
        ":1700000000000",
    ])
    def test_correctly_signed_bad_payloads_return_none(self, token_service, payload):
        assert token_service.verify_token(forge(payload)) is None

    def test_non_string_input_returns_none(self, token_service):
        assert token_service.verify_token(None) is None
        assert token_service.verify_token(12345) is None

    def test_concrete_scenario(self):
        clock = FakeClock(T0)
        service = UnsubscribeTokenService(secret_provider=lambda: "s3cr3t", clock=clock)
        token1 = service.generate_token("user_123")

        clock.now = T0 + 1000
        payload = service.verify_token(token1)
        assert (payload.user_id, payload.timestamp) == ("user_123", T0)

        clock.now = T0 + 31 * DAY_MS
        assert service.verify_token(token1) is None
