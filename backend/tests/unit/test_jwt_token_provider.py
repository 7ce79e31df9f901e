"""Unit tests for the flask-jwt-extended token adapter."""

from __future__ import annotations

from datetime import timedelta

import jwt
import pytest
from flask_jwt_extended import create_access_token, decode_token

from blogapi.infra.jwt.flask_jwt_token_provider import JWTTokenProvider


@pytest.fixture()
def provider(app) -> JWTTokenProvider:
    return JWTTokenProvider()


def test_issued_tokens_carry_type_issuer_audience(app, provider):
    access = provider.issue_access_token("user-1")
    refresh = provider.issue_refresh_token("user-1")

    claims = decode_token(access)
    assert claims["sub"] == "user-1"
    assert claims["type"] == "access"
    assert claims["iss"] == "mock-api"
    assert claims["aud"] == "mock-client"
    assert claims["exp"] - claims["iat"] == 15 * 60
    assert claims["jti"]

    refresh_claims = decode_token(refresh)
    assert refresh_claims["type"] == "refresh"
    assert refresh_claims["exp"] - refresh_claims["iat"] == 7 * 24 * 3600


def test_verify_roundtrip(provider):
    token = provider.issue_refresh_token("user-9")
    claims = provider.verify(token)
    assert claims is not None
    assert claims.user_id == "user-9"
    assert claims.type == "refresh"


def test_each_token_gets_a_fresh_jti(provider):
    first = decode_token(provider.issue_access_token("u"))
    second = decode_token(provider.issue_access_token("u"))
    assert first["jti"] != second["jti"]


def test_verify_never_raises(app, provider):
    expired = create_access_token(identity="u", expires_delta=timedelta(seconds=-1))
    forged = jwt.encode(
        {"sub": "u", "type": "access", "iss": "mock-api", "aud": "mock-client"},
        "another-secret-key-of-sufficient-length",
        algorithm="HS256",
    )
    wrong_audience = jwt.encode(
        {"sub": "u", "type": "access", "iss": "mock-api", "aud": "someone-else"},
        app.config["JWT_SECRET_KEY"],
        algorithm="HS256",
    )

    for token in ("", "garbage", "a.b.c", expired, forged, wrong_audience):
        assert provider.verify(token) is None
