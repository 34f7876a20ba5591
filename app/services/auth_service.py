"""
Auth Provider - email/password accounts for admins.

Provides:
- sign_up / sign_in / sign_out / current_user
- on_auth_state_changed: listeners notified with an AuthEvent whenever a user
  signs in or out (returns an unsubscribe callable)

Sign-out revokes the token's `jti` in the revoked_tokens collection; a revoked
token is rejected by current_user even if it has not expired.
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from app.core.auth import create_access_token, decode_token, hash_password, verify_password
from app.core.errors import AccountExistsError, AuthError, DuplicateRecordError
from app.db.mongodb import DocumentStore
from app.schemas.schemas import User, decode_user

logger = logging.getLogger(__name__)

SIGNED_IN = "signed_in"
SIGNED_OUT = "signed_out"


@dataclass(frozen=True)
class AuthEvent:
    kind: str
    user: Optional[User]


AuthListener = Callable[[AuthEvent], None]


class AuthProvider:

    def __init__(self, store: DocumentStore):
        self.store = store
        self._listeners: List[AuthListener] = []

    # ----------------------------------------------------------
    # Notifications
    # ----------------------------------------------------------

    def on_auth_state_changed(self, listener: AuthListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, event: AuthEvent):
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception(f"Auth listener failed on {event.kind}")

    # ----------------------------------------------------------
    # Accounts
    # ----------------------------------------------------------

    def sign_up(self, name: str, email: str, password: str) -> User:
        email = email.strip().lower()
        if self.store.exists("users", {"email": email}):
            raise AccountExistsError("Email already registered")

        try:
            uid = self.store.insert("users", {
                "name": name.strip(),
                "email": email,
                "password_hash": hash_password(password),
                "created_at": self.store.server_timestamp(),
            })
        except DuplicateRecordError:
            # A concurrent sign-up won the unique index on users.email
            raise AccountExistsError("Email already registered")
        logger.info(f"Registered user {uid}")
        return User(uid=uid, name=name.strip(), email=email)

    def sign_in(self, email: str, password: str) -> Tuple[str, User]:
        """Check credentials and return (access_token, user)."""
        docs = self.store.query("users", {"email": email.strip().lower()}, limit=1)
        if not docs:
            raise AuthError("Invalid email or password")

        stored = decode_user(docs[0])
        if not verify_password(password, stored.password_hash):
            raise AuthError("Invalid email or password")

        user = User(uid=stored.uid, name=stored.name, email=stored.email)
        token = create_access_token({"sub": user.uid, "jti": uuid.uuid4().hex})
        self._notify(AuthEvent(SIGNED_IN, user))
        return token, user

    def sign_out(self, token: str) -> None:
        user = self.current_user(token)
        payload = decode_token(token)
        self.store.insert("revoked_tokens", {
            "jti": payload.get("jti"),
            "uid": user.uid,
            "revoked_at": self.store.server_timestamp(),
        })
        self._notify(AuthEvent(SIGNED_OUT, user))

    def current_user(self, token: str) -> User:
        payload = decode_token(token)
        if not payload or not payload.get("sub"):
            raise AuthError("Invalid or expired token")

        jti = payload.get("jti")
        if jti and self.store.exists("revoked_tokens", {"jti": jti}):
            raise AuthError("Invalid or expired token")

        stored = decode_user(self.store.get("users", payload["sub"]))
        if stored is None:
            raise AuthError("Invalid or expired token")
        return User(uid=stored.uid, name=stored.name, email=stored.email)
