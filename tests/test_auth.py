"""Tests for sign-up, login and the access-token gate."""

import threading
from unittest.mock import Mock

import jwt
import pytest
from fastapi import Request

from auth import dependencies, schemas, security, service
from core.errors import AuthError


class TestSecurity:
    def test_password_hash_verifies(self):
        hashed = security.hash_password("s3cret")

        assert hashed != "s3cret"
        assert security.verify_password("s3cret", hashed)
        assert not security.verify_password("wrong", hashed)

    def test_verify_rejects_garbage_hash(self):
        assert not security.verify_password("s3cret", "not-a-bcrypt-hash")

    def test_passwords_past_bcrypt_limit_are_hashed_in_full(self):
        long_password = "p" * 100
        same_prefix = "p" * 72 + "q" * 28

        hashed = security.hash_password(long_password)

        assert security.verify_password(long_password, hashed)
        assert not security.verify_password(same_prefix, hashed)

    def test_multibyte_password_past_limit(self):
        password = "é" * 40

        assert security.verify_password(password, security.hash_password(password))

    def test_access_token_carries_user_id(self):
        token = security.build_access_token(user_id=12)

        payload = security.decode_access_token(token)

        assert payload["userID"] == 12
        assert payload["exp"] - payload["iat"] == 60 * 60

    def test_refresh_token_embeds_access_token(self):
        access = security.build_access_token(user_id=12)
        refresh = security.build_refresh_token(user_id=12, access_token=access)

        payload = jwt.decode(refresh, security.refresh_key(), algorithms=[security.jwt_algorithm()])

        assert payload["userID"] == 12
        assert payload["accessToken"] == access
        assert payload["exp"] - payload["iat"] == 7 * 24 * 60 * 60

    def test_refresh_token_is_not_an_access_token(self):
        access = security.build_access_token(user_id=12)
        refresh = security.build_refresh_token(user_id=12, access_token=access)

        with pytest.raises(security.AuthSecurityError):
            security.decode_access_token(refresh)

    def test_expired_token_is_rejected(self, monkeypatch):
        monkeypatch.setenv("ACCESS_TOKEN_EXPIRE_MIN", "-1")
        token = security.build_access_token(user_id=12)

        with pytest.raises(security.AuthSecurityError):
            security.decode_access_token(token)

    def test_token_signed_with_other_secret_is_rejected(self):
        token = jwt.encode({"userID": 1, "type": "access"}, "someone-else", algorithm="HS256")

        with pytest.raises(security.AuthSecurityError):
            security.decode_access_token(token)


class TestAuthGate:
    """Test the get_current_user_id dependency."""

    def _request(self) -> Mock:
        request = Mock(spec=Request)
        request.state = Mock()
        return request

    @pytest.mark.asyncio
    async def test_missing_header_is_unauthorized(self):
        with pytest.raises(AuthError) as exc_info:
            await dependencies.get_access_token(None)

        assert exc_info.value.status_code == 401
        assert exc_info.value.message == "Access token is missing."

    @pytest.mark.asyncio
    async def test_bearer_and_bare_tokens_are_accepted(self):
        token = security.build_access_token(user_id=5)

        assert await dependencies.get_access_token(f"Bearer {token}") == token
        assert await dependencies.get_access_token(token) == token

    @pytest.mark.asyncio
    async def test_valid_token_attaches_identity(self):
        request = self._request()
        token = security.build_access_token(user_id=5)

        user_id = await dependencies.get_current_user_id(request, token)

        assert user_id == 5
        assert request.state.user_id == 5

    @pytest.mark.asyncio
    async def test_malformed_token_is_bad_request(self):
        with pytest.raises(AuthError) as exc_info:
            await dependencies.get_current_user_id(self._request(), "abc.def.ghi")

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == service.INVALID_TOKEN_MESSAGE


class TestCreateUser:
    def test_missing_password_is_rejected(self, client, user_store):
        response = client.post("/users", json={"email": "a@example.com"})

        assert response.status_code == 400
        assert response.json() == {"message": "Email and password are required."}
        assert user_store.rows == {}

    def test_password_is_stored_hashed_and_not_returned(self, client, user_store):
        response = client.post("/users", json={"email": "A@Example.com", "password": "s3cret"})

        assert response.status_code == 201
        assert response.json() == {"id": 1, "email": "a@example.com"}
        stored = user_store.rows[1]
        assert stored["password_hash"] != "s3cret"
        assert security.verify_password("s3cret", stored["password_hash"])

    def test_missing_body_uses_credentials_message(self, client, user_store):
        for path in ("/users", "/users/login"):
            response = client.post(path)

            assert response.status_code == 400
            assert response.json() == {"message": "Email and password are required."}
        assert user_store.rows == {}

    def test_long_password_signs_up_and_logs_in(self, client):
        credentials = {"email": "long@example.com", "password": "x" * 100}

        created = client.post("/users", json=credentials)
        login = client.post("/users/login", json=credentials)

        assert created.status_code == 201
        assert login.status_code == 200
        assert set(login.json()) == {"accessToken", "refreshToken"}

    @pytest.mark.asyncio
    async def test_hashing_runs_off_the_event_loop(self, monkeypatch, user_store):
        hashing_threads = []
        real_hash = security.hash_password

        def recording_hash(plain_password):
            hashing_threads.append(threading.get_ident())
            return real_hash(plain_password)

        monkeypatch.setattr(security, "hash_password", recording_hash)

        await service.create_user(
            user_store, schemas.CredentialsRequest(email="t@example.com", password="s3cret")
        )

        assert hashing_threads
        assert hashing_threads[0] != threading.get_ident()


class TestLogin:
    @pytest.fixture(autouse=True)
    def registered(self, client):
        client.post("/users", json={"email": "ann@example.com", "password": "s3cret"})

    def test_wrong_password_hides_which_field_failed(self, client):
        wrong_password = client.post(
            "/users/login", json={"email": "ann@example.com", "password": "nope"}
        )
        unknown_email = client.post(
            "/users/login", json={"email": "bob@example.com", "password": "s3cret"}
        )

        for response in (wrong_password, unknown_email):
            assert response.status_code == 401
            assert response.json() == {"message": "Invalid email or password."}

    def test_blank_fields_are_rejected(self, client):
        response = client.post("/users/login", json={"email": "", "password": ""})

        assert response.status_code == 400

    def test_login_returns_usable_credential_pair(self, client):
        response = client.post(
            "/users/login", json={"email": "ann@example.com", "password": "s3cret"}
        )

        assert response.status_code == 200
        tokens = response.json()
        assert set(tokens) == {"accessToken", "refreshToken"}
        assert security.decode_access_token(tokens["accessToken"])["userID"] == 1

        protected = client.delete(
            "/products", headers={"authorization": f"Bearer {tokens['accessToken']}"}
        )
        assert protected.status_code == 200


class TestMisc:
    def test_root_and_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}
        assert "message" in client.get("/").json()

    def test_unknown_route_uses_message_body(self, client):
        response = client.get("/nowhere")

        assert response.status_code == 404
        assert response.json() == {"message": "Not Found"}
