"""
Tests for the session token: minting, verification and the cookie endpoints.
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest
from fastapi import HTTPException

from solosphere.config import settings
from solosphere.services.auth_service import (
    create_access_token,
    get_current_email,
    verify_access_token,
)


class TestTokens:
    def test_round_trip_keeps_claims(self):
        token = create_access_token({"email": "a@x.com"})

        payload = verify_access_token(token)

        assert payload["email"] == "a@x.com"
        assert "exp" in payload

    def test_expired_token_is_401(self):
        token = jwt.encode(
            {"email": "a@x.com", "exp": datetime.now(timezone.utc) - timedelta(days=1)},
            settings.access_token_secret,
            algorithm="HS256",
        )

        with pytest.raises(HTTPException) as exc_info:
            verify_access_token(token)

        assert exc_info.value.status_code == 401

    def test_wrong_secret_is_401(self):
        token = jwt.encode({"email": "a@x.com"}, "some-other-secret", algorithm="HS256")

        with pytest.raises(HTTPException) as exc_info:
            verify_access_token(token)

        assert exc_info.value.status_code == 401

    async def test_token_without_email_is_401(self):
        token = create_access_token({"name": "anon"})

        with pytest.raises(HTTPException) as exc_info:
            await get_current_email(token)

        assert exc_info.value.status_code == 401

    async def test_missing_cookie_is_401(self):
        with pytest.raises(HTTPException):
            await get_current_email(None)


class TestCookieEndpoints:
    def test_jwt_sets_cookie(self, client):
        response = client.post("/jwt", json={"email": "a@x.com"})

        assert response.status_code == 200
        assert response.json() == {"success": True}
        set_cookie = response.headers["set-cookie"]
        assert set_cookie.startswith("token=")
        assert "HttpOnly" in set_cookie
        assert "SameSite=strict" in set_cookie

    def test_issued_cookie_authenticates(self, client):
        token = client.post("/jwt", json={"email": "a@x.com"}).cookies["token"]
        client.cookies.set("token", token)

        assert client.get("/jobs/a@x.com").status_code == 200

    def test_logout_clears_cookie(self, client):
        response = client.post("/logOut", json={"email": "a@x.com"})

        assert response.json() == {"success": True}
        assert 'token=""' in response.headers["set-cookie"]
        assert "Max-Age=0" in response.headers["set-cookie"]
