"""
Unit tests for the token service.
"""
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from jwt_auth.jwt_auth.auth_service.auth import TokenService, IssuedToken
from jwt_auth.jwt_auth.auth_service.errors import Expired, InvalidSignature, Malformed, TokenError

SECRET = "unit-test-secret-0123456789abcdef0123456789"
T0 = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class FrozenClock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FrozenClock(T0)


@pytest.fixture
def tokens(clock):
    return TokenService(SECRET, expiration_ms=60000, clock=clock)


def test_issue_then_validate_returns_subject(tokens):
    issued = tokens.issue(42)
    assert isinstance(issued, IssuedToken)
    assert issued.expires_in == 60
    assert tokens.validate(issued.token) == "42"


def test_issued_claims(tokens):
    issued = tokens.issue("7")
    claims = jwt.decode(issued.token, options={"verify_signature": False})
    assert claims["sub"] == "7"
    assert claims["iat"] == int(T0.timestamp())
    assert claims["exp"] == int(T0.timestamp()) + 60
    assert jwt.get_unverified_header(issued.token)["alg"] == "HS256"


def test_issued_token_is_immutable(tokens):
    issued = tokens.issue(1)
    with pytest.raises(AttributeError):
        issued.token = "other"


def test_expiry_boundary(tokens, clock):
    issued = tokens.issue(1)

    clock.now = T0 + timedelta(seconds=59, milliseconds=999)
    assert tokens.validate(issued.token) == "1"

    clock.now = T0 + timedelta(seconds=60)
    with pytest.raises(Expired):
        tokens.validate(issued.token)

    clock.now = T0 + timedelta(seconds=60, milliseconds=1)
    with pytest.raises(Expired):
        tokens.validate(issued.token)


@pytest.mark.parametrize("replacement", ["A", "B", "w", "_", "@"])
@pytest.mark.parametrize("position", range(43))
def test_tampered_signature_is_rejected(tokens, position, replacement):
    token = tokens.issue(1).token
    header, payload, signature = token.split(".")
    assert len(signature) == 43
    if signature[position] == replacement:
        pytest.skip("replacement matches the original character")
    flipped = signature[:position] + replacement + signature[position + 1:]

    with pytest.raises(InvalidSignature):
        tokens.validate(".".join([header, payload, flipped]))


def test_truncated_or_extended_signature_is_rejected(tokens):
    token = tokens.issue(1).token
    with pytest.raises(InvalidSignature):
        tokens.validate(token[:-1])
    with pytest.raises(InvalidSignature):
        tokens.validate(token + "A")


def test_tampered_payload_is_rejected(tokens, clock):
    token = tokens.issue(1).token
    header, _, signature = token.split(".")
    forged_payload = jwt.encode(
        {"sub": "2", "iat": T0, "exp": T0 + timedelta(minutes=1)}, SECRET, algorithm="HS256"
    ).split(".")[1]

    with pytest.raises(InvalidSignature):
        tokens.validate(".".join([header, forged_payload, signature]))


def test_wrong_secret_is_rejected(clock):
    issued = TokenService("another-secret-0123456789abcdef012345", clock=clock).issue(1)
    with pytest.raises(InvalidSignature):
        TokenService(SECRET, clock=clock).validate(issued.token)


def test_unsigned_token_is_rejected(tokens):
    unsigned = jwt.encode({"sub": "1", "iat": T0, "exp": T0 + timedelta(minutes=1)}, None, algorithm="none")
    with pytest.raises(InvalidSignature):
        tokens.validate(unsigned)


@pytest.mark.parametrize("garbage", ["", "abc", "a.b.c", "not a token at all"])
def test_garbage_is_malformed(tokens, garbage):
    with pytest.raises(Malformed):
        tokens.validate(garbage)


def test_missing_claim_is_malformed(tokens):
    no_exp = jwt.encode({"sub": "1", "iat": T0}, SECRET, algorithm="HS256")
    with pytest.raises(Malformed):
        tokens.validate(no_exp)


def test_token_errors_share_a_base(tokens):
    with pytest.raises(TokenError):
        tokens.validate("abc")


def test_ttl_is_fixed_at_construction():
    assert TokenService(SECRET, expiration_ms=3600000).expiration_seconds == 3600
    with pytest.raises(ValueError):
        TokenService(SECRET, expiration_ms=0)
    with pytest.raises(ValueError):
        TokenService("", expiration_ms=1000)


def test_sub_second_issue_keeps_full_ttl(clock):
    clock.now = T0 + timedelta(milliseconds=700)
    tokens = TokenService(SECRET, expiration_ms=1500, clock=clock)
    issued = tokens.issue(1)

    claims = jwt.decode(issued.token, options={"verify_signature": False})
    assert claims["iat"] == int(T0.timestamp())
    assert claims["exp"] == int(T0.timestamp()) + 3

    clock.now = T0 + timedelta(milliseconds=1100)
    assert tokens.validate(issued.token) == "1"

    # Still valid at issue time + TTL, since exp is rounded up
    clock.now = T0 + timedelta(milliseconds=2200)
    assert tokens.validate(issued.token) == "1"

    clock.now = T0 + timedelta(seconds=3)
    with pytest.raises(Expired):
        tokens.validate(issued.token)


def test_short_ttl_token_is_valid_when_issued(clock):
    clock.now = T0 + timedelta(milliseconds=999)
    tokens = TokenService(SECRET, expiration_ms=500, clock=clock)
    issued = tokens.issue(1)

    assert tokens.validate(issued.token) == "1"
