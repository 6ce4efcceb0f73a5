import json
import logging
import os
from typing import Dict, List, Optional

from pydantic import ValidationError

import config
from schemas import User, new_id, utcnow
from seed_data import MOCK_USERS
from validation import is_valid_email

logger = logging.getLogger(__name__)


class SessionProvider:
    """Mock login against fixed accounts; the current user lives in one durable key."""

    def __init__(self, path: str = config.SESSION_FILE, users: Optional[List[dict]] = None,
                 key: str = config.SESSION_KEY):
        self.path = path
        self.key = key
        self.users = users if users is not None else MOCK_USERS
        self.user: Optional[User] = None
        self.loading = False
        self.error: Optional[str] = None
        self._restore()

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    # Durable key-value slot
    def _read_slots(self) -> Dict[str, dict]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error("Error reading session store %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def _write_slots(self, slots: Dict[str, dict]) -> None:
        with open(self.path, "w") as f:
            json.dump(slots, f, indent=2)

    def _restore(self) -> None:
        slots = self._read_slots()
        saved = slots.get(self.key)
        if saved is None:
            return
        try:
            self.user = User.model_validate(saved)
        except ValidationError as e:
            logger.error("Error parsing saved user: %s", e.error_count())
            slots.pop(self.key, None)
            self._write_slots(slots)

    def _save(self, user: User) -> None:
        self.user = user
        slots = self._read_slots()
        slots[self.key] = user.to_wire()
        self._write_slots(slots)

    # Session operations
    def login(self, email: str, password: str) -> dict:
        self.loading = True
        self.error = None
        try:
            found = next((u for u in self.users if u["email"] == email and u["password"] == password), None)
            if found is None:
                self.error = "Invalid email or password"
                return {"success": False, "error": self.error}
            self._save(User.model_validate({k: v for k, v in found.items() if k != "password"}))
            logger.info("User %s logged in", email)
            return {"success": True}
        finally:
            self.loading = False

    def signup(self, data: dict) -> dict:
        self.loading = True
        self.error = None
        try:
            email = str(data.get("email") or "").strip()
            name = str(data.get("name") or "").strip()
            if not name or not is_valid_email(email):
                self.error = "A name and a valid email address are required"
                return {"success": False, "error": self.error}
            user = User(
                id=new_id(),
                email=email,
                name=name,
                role=data.get("role") or "teacher",
                campus=data.get("campus"),
                created_at=utcnow(),
            )
            self._save(user)
            return {"success": True}
        except ValidationError as e:
            self.error = str(e)
            return {"success": False, "error": self.error}
        finally:
            self.loading = False

    def logout(self) -> None:
        self.user = None
        slots = self._read_slots()
        if slots.pop(self.key, None) is not None:
            self._write_slots(slots)

    def reset_password(self, email: str) -> dict:
        logger.info("Password reset email sent to %s", email)
        return {"success": True, "message": "Password reset email sent successfully!"}
