"""
Tests for signup and login semantics
"""

import bcrypt
import pytest

from clipshare.core.database import create_db_engine, create_session_factory
from clipshare.core.errors import DuplicateUsername, InvalidCredentials, MissingFields, StoreError
from clipshare.models.user import User
from clipshare.services.credential_store import CredentialStore, hash_password, verify_password


class TestCredentialStore:

    @pytest.fixture
    def store(self, session_factory):
        return CredentialStore(session_factory, rounds=4)

    def test_register_then_authenticate(self, store):
        store.register("alice", "secret123")

        store.authenticate("alice", "secret123")

    def test_wrong_password_then_right_password(self, store):
        store.register("alice", "secret123")

        with pytest.raises(InvalidCredentials):
            store.authenticate("alice", "wrongpass")
        store.authenticate("alice", "secret123")

    def test_duplicate_username_keeps_existing_record(self, store, session_factory):
        store.register("alice", "secret123")

        with pytest.raises(DuplicateUsername, match="Username already exists."):
            store.register("alice", "another-password")

        store.authenticate("alice", "secret123")
        with pytest.raises(InvalidCredentials):
            store.authenticate("alice", "another-password")

        db = session_factory()
        try:
            assert db.query(User).filter(User.username == "alice").count() == 1
        finally:
            db.close()

    def test_unknown_user_and_wrong_password_are_indistinguishable(self, store):
        store.register("alice", "secret123")

        with pytest.raises(InvalidCredentials) as wrong_password:
            store.authenticate("alice", "nope")
        with pytest.raises(InvalidCredentials) as unknown_user:
            store.authenticate("bob", "secret123")

        assert type(wrong_password.value) is type(unknown_user.value)
        assert wrong_password.value.message == unknown_user.value.message
        assert wrong_password.value.detail == unknown_user.value.detail

    @pytest.mark.parametrize("username,password", [("", "secret"), ("alice", ""), (None, "secret"), ("alice", None)])
    def test_missing_fields(self, store, username, password):
        with pytest.raises(MissingFields):
            store.register(username, password)
        with pytest.raises(MissingFields):
            store.authenticate(username, password)

    def test_password_is_stored_hashed(self, store, session_factory):
        store.register("alice", "secret123")

        db = session_factory()
        try:
            stored = db.query(User).filter(User.username == "alice").one().password_hash
        finally:
            db.close()

        assert stored != "secret123"
        assert stored.startswith("$2b$04$")

    def test_store_failure_surfaces_as_store_error(self, settings):
        # Database without any tables
        engine = create_db_engine(settings)
        store = CredentialStore(create_session_factory(engine), rounds=4)
        try:
            with pytest.raises(StoreError) as exc_info:
                store.register("alice", "secret123")
            assert exc_info.value.message == "Error registering user."
            assert "users" in exc_info.value.detail

            with pytest.raises(StoreError, match="Error logging in."):
                store.authenticate("alice", "secret123")
        finally:
            engine.dispose()


class TestPasswordHashing:

    def test_hash_and_verify(self):
        hashed = hash_password("secret123", rounds=4)

        assert verify_password("secret123", hashed)
        assert not verify_password("secret124", hashed)

    def test_hashes_are_salted(self):
        assert hash_password("secret123", rounds=4) != hash_password("secret123", rounds=4)

    def test_verifies_2a_prefixed_hashes(self):
        hashed = bcrypt.hashpw(b"secret123", bcrypt.gensalt(rounds=4)).decode("utf-8")
        legacy = "$2a$" + hashed[4:]

        assert verify_password("secret123", legacy)

    def test_long_passwords_are_accepted(self):
        password = "p" * 100
        hashed = hash_password(password, rounds=4)

        assert verify_password(password, hashed)

    def test_non_bcrypt_hash_does_not_verify(self):
        assert not verify_password("secret123", "secret123")
