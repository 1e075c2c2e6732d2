"""
Signup and login against the users table.

No session state is created: a successful authenticate() only tells the
caller the credentials matched.
"""

import logging

import bcrypt
from sqlalchemy.orm import sessionmaker

from clipshare.core.database import session_scope
from clipshare.core.errors import DuplicateUsername, InvalidCredentials, MissingFields
from clipshare.models.user import User

logger = logging.getLogger(__name__)

# bcrypt only reads the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72

MISSING_CREDENTIALS = "Please provide both username and password."


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = 10) -> str:
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        logger.warning("Stored password hash has an unrecognised format")
        return False


class CredentialStore:
    """Owns signup and login semantics over a session factory"""

    def __init__(self, session_factory: sessionmaker, rounds: int = 10):
        self.session_factory = session_factory
        self.rounds = rounds

    def register(self, username: str, password: str) -> None:
        if not username or not password:
            raise MissingFields(MISSING_CREDENTIALS)

        with session_scope(self.session_factory, "Error registering user.") as db:
            existing = db.query(User.id).filter(User.username == username).first()
            if existing is not None:
                logger.info(f"Signup rejected, username taken: {username}")
                raise DuplicateUsername("Username already exists.")

            db.add(User(username=username, password_hash=hash_password(password, self.rounds)))

        logger.info(f"Registered user {username}")

    def authenticate(self, username: str, password: str) -> None:
        if not username or not password:
            raise MissingFields(MISSING_CREDENTIALS)

        with session_scope(self.session_factory, "Error logging in.") as db:
            user = db.query(User).filter(User.username == username).first()
            stored_hash = user.password_hash if user is not None else None

        # Unknown user and wrong password are indistinguishable to the caller
        if stored_hash is None or not verify_password(password, stored_hash):
            logger.info(f"Login failed for {username}")
            raise InvalidCredentials("Invalid username or password.")

        logger.info(f"Login succeeded for {username}")
