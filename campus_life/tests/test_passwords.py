"""
Tests for password storage.
"""
from campus_life.passwords import hash_password, verify_password


class TestPasswords:
    def test_stored_as_argon2id(self):
        encoded = hash_password("Secret123")

        assert encoded.startswith("$argon2id$")
        assert verify_password("Secret123", encoded)

    def test_wrong_password(self):
        assert verify_password("secret123", hash_password("Secret123")) is False

    def test_corrupt_hash(self):
        assert verify_password("Secret123", "not-a-hash") is False
