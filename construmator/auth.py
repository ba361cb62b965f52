from __future__ import annotations
import hashlib
import hmac
import logging
import os
import time
import uuid
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from .errors import NotAuthenticatedError, ValidationError
from .models import User
from .store import JsonListFile

logger = logging.getLogger(__name__)

USER_TYPES = ("customer", "admin")
MIN_PASSWORD = 6
_ITERATIONS = 120_000


def hash_password(password: str, salt: Optional[bytes] = None) -> str:
    salt = salt or os.urandom(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, _ITERATIONS)
    return f"{salt.hex()}${digest.hex()}"


def check_password(password: str, stored: str) -> bool:
    try:
        salt_hex, _ = stored.split("$", 1)
        salt = bytes.fromhex(salt_hex)
    except ValueError:
        return False
    return hmac.compare_digest(hash_password(password, salt), stored)


class LocalAuth:
    """Users in a JSON file, one in-process session with an expiry."""

    def __init__(self, path, session_hours: float = 24.0, clock: Callable[[], float] = time.time):
        self.users = JsonListFile(path)
        self.session_seconds = session_hours * 3600
        self._clock = clock
        self._session: Optional[Dict] = None

    def _public(self, rec: Dict) -> User:
        return User(id=rec["id"], email=rec["email"], name=rec.get("name", ""),
                    user_type=rec.get("userType", "customer"), created_at=rec.get("createdAt", ""))

    def register(self, email: str, password: str, name: str, user_type: str = "customer") -> User:
        email = (email or "").strip().lower()
        name = (name or "").strip()
        if not email or not password or not name:
            raise ValidationError("All fields are required")
        if user_type not in USER_TYPES:
            raise ValidationError("Please select a valid user type")
        if len(password) < MIN_PASSWORD:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD} characters")
        records = self.users.read()
        if any(r.get("email", "").lower() == email for r in records):
            raise ValidationError("Email already registered")
        rec = {
            "id": uuid.uuid4().hex,
            "email": email,
            "name": name,
            "userType": user_type,
            "password": hash_password(password),
            "createdAt": datetime.now(timezone.utc).isoformat(),
        }
        records.append(rec)
        self.users.write(records)
        logger.info("registered %s (%s)", email, user_type)
        return self._public(rec)

    def login(self, email: str, password: str) -> User:
        email = (email or "").strip().lower()
        if not email or not password:
            raise ValidationError("Please enter email and password")
        for rec in self.users.read():
            if rec.get("email", "").lower() == email and check_password(password, rec.get("password", "")):
                user = self._public(rec)
                self._session = {"user": user, "expires": self._clock() + self.session_seconds}
                logger.info("login %s", email)
                return user
        raise NotAuthenticatedError("Invalid email or password")

    def logout(self):
        self._session = None

    def is_logged_in(self) -> bool:
        if self._session is None:
            return False
        if self._clock() > self._session["expires"]:
            logger.info("session expired")
            self.logout()
            return False
        return True

    def current_user(self) -> Optional[User]:
        return self._session["user"] if self.is_logged_in() else None

    def list_users(self) -> List[User]:
        return [self._public(r) for r in self.users.read()]
