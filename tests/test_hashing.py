"""Tests for password hashing helpers."""
from app.utils.hashing import hash_password, verify_password


def test_hash_is_not_plaintext():
    hashed = hash_password("pw123", rounds=4)
    assert hashed != "pw123"
    assert hashed.startswith("$2b$04$")


def test_hash_is_salted():
    assert hash_password("pw123", rounds=4) != hash_password("pw123", rounds=4)


def test_verify_password():
    hashed = hash_password("pw123", rounds=4)
    assert verify_password("pw123", hashed) is True
    assert verify_password("wrong", hashed) is False


def test_verify_password_rejects_non_bcrypt_value():
    assert verify_password("pw123", "pw123") is False


def test_long_password_is_truncated_to_72_bytes():
    password = "p" * 100
    hashed = hash_password(password, rounds=4)
    assert verify_password(password, hashed) is True
    assert verify_password("p" * 72, hashed) is True
    assert verify_password("p" * 71, hashed) is False
