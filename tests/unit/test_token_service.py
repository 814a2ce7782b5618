import pytest
from jose import JWTError

from app.core.security import TokenService, get_password_hash, verify_password


@pytest.fixture
def token_service():
    return TokenService(secret_key="unit-test-secret", expire_minutes=5)


def test_issued_claims_round_trip(token_service):
    token = token_service.issue({"id": 7, "role": "student", "name": "Ada", "email": "ada@example.com"})
    claims = token_service.verify(token)
    assert claims["id"] == 7
    assert claims["role"] == "student"
    assert "exp" in claims
    assert "jti" in claims


def test_each_token_is_unique(token_service):
    claims = {"id": 1, "role": "instructor"}
    assert token_service.issue(claims) != token_service.issue(claims)


def test_expired_token_is_rejected():
    expired = TokenService(secret_key="unit-test-secret", expire_minutes=-1)
    token = expired.issue({"id": 1})
    with pytest.raises(JWTError):
        expired.verify(token)


def test_token_from_another_secret_is_rejected(token_service):
    forged = TokenService(secret_key="someone-else").issue({"id": 1})
    with pytest.raises(JWTError):
        token_service.verify(forged)


def test_password_hashing():
    hashed = get_password_hash("secret1")
    assert hashed != "secret1"
    assert verify_password("secret1", hashed)
    assert not verify_password("secret2", hashed)
