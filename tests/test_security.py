"""
Tests for token signing and password hashing.
"""

import json
import uuid
from base64 import urlsafe_b64encode

import pytest

from auth import password
from auth.jwt import TokenError, _sign, create_token, verify_token

SECRET = "unit-secret"


class TestTokens:
    def test_round_trip_carries_user_id(self):
        user_id = str(uuid.uuid4())
        payload = verify_token(create_token(user_id, SECRET), SECRET)
        assert payload["id"] == user_id
        assert "exp" not in payload

    def test_wrong_secret(self):
        token = create_token("u1", SECRET)
        with pytest.raises(TokenError):
            verify_token(token, "other")

    @pytest.mark.parametrize("token", ["", "nodot", "###.sig", "e30=.x"])
    def test_malformed(self, token):
        with pytest.raises(TokenError):
            verify_token(token, SECRET)

    def test_signed_non_object_payload(self):
        raw = json.dumps(["id"]).encode()
        token = urlsafe_b64encode(raw).decode() + "." + _sign(raw, SECRET)
        with pytest.raises(TokenError):
            verify_token(token, SECRET)

    def test_blank_secret_is_not_a_token_error(self):
        with pytest.raises(ValueError) as exc_info:
            create_token("u1", "")
        assert not isinstance(exc_info.value, TokenError)

        with pytest.raises(ValueError) as exc_info:
            verify_token("a.b", "")
        assert not isinstance(exc_info.value, TokenError)


class TestPasswords:
    def test_hash_uses_twelve_rounds(self, monkeypatch):
        monkeypatch.setattr(password, "BCRYPT_ROUNDS", 12)
        hashed = password.hash_password("pw")
        assert hashed.startswith("$2b$12$")
        assert password.verify_password("pw", hashed)

    def test_hashes_are_salted(self):
        assert password.hash_password("pw") != password.hash_password("pw")

    def test_verify_rejects_wrong_password(self):
        hashed = password.hash_password("pw")
        assert not password.verify_password("other", hashed)

    def test_verify_handles_corrupt_hash(self):
        assert password.verify_password("pw", "not-a-bcrypt-hash") is False

    def test_long_password_round_trip(self):
        hashed = password.hash_password("x" * 80)
        assert password.verify_password("x" * 80, hashed)

    def test_only_first_72_bytes_count(self):
        hashed = password.hash_password("a" * 72 + "tail-one")
        assert password.verify_password("a" * 72 + "tail-two", hashed)
        assert not password.verify_password("b" + "a" * 71, hashed)
