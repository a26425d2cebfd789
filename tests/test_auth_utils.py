from datetime import timedelta

import pytest

from app.config import settings
from app.utils.auth import (
    create_access_token,
    decode_access_token,
    extract_user_id_from_token,
    fits_bcrypt,
    generate_confirmation_token,
    get_dummy_hash,
    get_password_hash,
    is_strong_password,
    verify_password,
)


@pytest.mark.parametrize(
    "password",
    ["Senha@123", "Abcdef1!", "çÇ9#longer-password"],
)
def test_strong_passwords_are_accepted(password):
    assert is_strong_password(password)


@pytest.mark.parametrize(
    "password",
    [
        "Ab1!",  # too short
        "senha@123",  # no uppercase
        "SENHA@123",  # no lowercase
        "Senha@abc",  # no digit
        "Senha1234",  # no symbol
        "",
    ],
)
def test_weak_passwords_are_rejected(password):
    assert not is_strong_password(password)


def test_password_hash_is_salted_and_verifiable():
    first = get_password_hash("Senha@123", rounds=4)
    second = get_password_hash("Senha@123", rounds=4)

    assert first != second
    assert "Senha@123" not in first
    assert first.startswith("$2b$04$")
    assert verify_password("Senha@123", first)
    assert not verify_password("Senha@124", first)


def test_verify_password_without_hash_is_false():
    assert verify_password("Senha@123", None) is False


def test_verify_password_with_malformed_hash_is_false():
    assert verify_password("Senha@123", "not-a-bcrypt-hash") is False


def test_fits_bcrypt_counts_bytes_not_characters():
    assert fits_bcrypt("a" * 72)
    assert not fits_bcrypt("a" * 73)
    # Each "é" is two bytes in UTF-8
    assert not fits_bcrypt("é" * 37)


def test_confirmation_tokens_are_random_hex():
    tokens = {generate_confirmation_token() for _ in range(50)}

    assert len(tokens) == 50
    for token in tokens:
        assert len(token) == 64
        int(token, 16)


def test_access_token_carries_user_id():
    token = create_access_token({"sub": "42"})

    assert decode_access_token(token)["sub"] == "42"
    assert extract_user_id_from_token(token) == 42


def test_expired_access_token_is_rejected():
    token = create_access_token({"sub": "42"}, expires_delta=timedelta(seconds=-5))

    assert decode_access_token(token) is None
    assert extract_user_id_from_token(token) is None


def test_tampered_or_non_numeric_tokens_yield_no_user():
    token = create_access_token({"sub": "42"})

    assert extract_user_id_from_token(token[:-2] + "xx") is None
    assert extract_user_id_from_token(create_access_token({"sub": "abc"})) is None
    assert extract_user_id_from_token(create_access_token({})) is None


def test_dummy_hash_uses_the_configured_work_factor():
    assert get_dummy_hash().startswith(f"$2b${settings.bcrypt_rounds:02d}$".encode())
    assert get_dummy_hash(5).startswith(b"$2b$05$")
    assert get_dummy_hash(5) is get_dummy_hash(5)


def test_oversized_password_is_rejected_without_raising():
    oversized = "A1!" + "a" * 80
    stored = get_password_hash("A1!" + "a" * 69, rounds=4)

    assert verify_password(oversized, None) is False
    # Shares its first 72 bytes with the stored password but must not match
    assert verify_password(oversized, stored) is False
