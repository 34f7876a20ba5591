"""
Unit tests for app/services/auth_service.py and app/core/auth.py
"""

from datetime import timedelta

import pytest

from app.core.auth import create_access_token, decode_token, hash_password, verify_password
from app.core.errors import AccountExistsError, AuthError
from app.services.auth_service import SIGNED_IN, SIGNED_OUT


@pytest.fixture
def auth(context):
    return context.auth


class TestPasswords:

    def test_hash_and_verify(self):
        hashed = hash_password("secret-pass")
        assert hashed != "secret-pass"
        assert verify_password("secret-pass", hashed)
        assert not verify_password("wrong", hashed)


class TestTokens:

    def test_round_trip(self):
        token = create_access_token({"sub": "u1"})
        assert decode_token(token)["sub"] == "u1"

    def test_expired_token(self):
        token = create_access_token({"sub": "u1"}, expires_delta=timedelta(seconds=-1))
        assert decode_token(token) is None

    def test_garbage_token(self):
        assert decode_token("not.a.token") is None


class TestAccounts:

    def test_sign_up_and_sign_in(self, auth):
        user = auth.sign_up("Ada", "Ada@Example.com", "secret-pass")
        token, signed_in = auth.sign_in("ada@example.com", "secret-pass")

        assert signed_in == user
        assert signed_in.email == "ada@example.com"
        assert auth.current_user(token) == user

    def test_duplicate_email(self, auth):
        auth.sign_up("Ada", "ada@example.com", "secret-pass")
        with pytest.raises(AccountExistsError):
            auth.sign_up("Other", "ADA@example.com", "another-pass")

    def test_wrong_password(self, auth):
        auth.sign_up("Ada", "ada@example.com", "secret-pass")
        with pytest.raises(AuthError):
            auth.sign_in("ada@example.com", "nope")

    def test_unknown_email(self, auth):
        with pytest.raises(AuthError):
            auth.sign_in("ghost@example.com", "secret-pass")

    def test_sign_out_revokes_token(self, auth, admin_token):
        auth.sign_out(admin_token)
        with pytest.raises(AuthError):
            auth.current_user(admin_token)

    def test_other_sessions_survive_sign_out(self, auth, admin_token):
        second, _ = auth.sign_in("ada@example.com", "secret-pass")
        auth.sign_out(admin_token)
        assert auth.current_user(second).email == "ada@example.com"

    def test_token_for_deleted_user(self, auth, store, admin_token):
        store.collection("users").delete_many({})
        with pytest.raises(AuthError):
            auth.current_user(admin_token)


class TestAuthStateListeners:

    def test_listeners_see_sign_in_and_sign_out(self, auth):
        events = []
        auth.on_auth_state_changed(events.append)

        auth.sign_up("Ada", "ada@example.com", "secret-pass")
        token, _ = auth.sign_in("ada@example.com", "secret-pass")
        auth.sign_out(token)

        assert [e.kind for e in events] == [SIGNED_IN, SIGNED_OUT]
        assert all(e.user.email == "ada@example.com" for e in events)

    def test_unsubscribe(self, auth):
        events = []
        unsubscribe = auth.on_auth_state_changed(events.append)
        unsubscribe()

        auth.sign_up("Ada", "ada@example.com", "secret-pass")
        auth.sign_in("ada@example.com", "secret-pass")
        assert events == []

    def test_failing_listener_does_not_break_sign_in(self, auth):
        def broken(event):
            raise RuntimeError("boom")

        auth.on_auth_state_changed(broken)
        auth.sign_up("Ada", "ada@example.com", "secret-pass")
        token, _ = auth.sign_in("ada@example.com", "secret-pass")
        assert token


class TestConcurrentSignUp:

    def test_unique_index_race_reports_existing_account(self, auth, store, monkeypatch):
        store.init_indexes()
        auth.sign_up("Ada", "ada@example.com", "secret-pass")
        # Both requests passed the existence check before either inserted
        monkeypatch.setattr(store, "exists", lambda collection, equals: False)

        with pytest.raises(AccountExistsError):
            auth.sign_up("Other", "ada@example.com", "another-pass")
        assert store.collection("users").count_documents({}) == 1
