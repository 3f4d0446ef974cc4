import jwt
import pytest

from benigna.auth.security import decode_token, generate_token, hash_password, verify_password


def test_password_hashing():
    hashed = hash_password("senha1")
    assert hashed != "senha1"
    assert verify_password("senha1", hashed)
    assert not verify_password("senha2", hashed)


def test_token_round_trip():
    assert decode_token(generate_token("user-1")) == "user-1"


def test_expired_token():
    with pytest.raises(jwt.ExpiredSignatureError):
        decode_token(generate_token("user-1", expires_minutes=-1))


def test_tampered_token():
    with pytest.raises(jwt.PyJWTError):
        decode_token(generate_token("user-1") + "x")
