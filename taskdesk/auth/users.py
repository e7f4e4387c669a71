"""
User storage and management.

Stores users in a JSON file keyed by user ID.
The password hash only ever leaves this module through
get_by_email_with_secret(), which is reserved for login.
"""

import json
import logging
import threading
import uuid
from pathlib import Path
from datetime import datetime, timezone
from typing import Optional, List
from dataclasses import dataclass, asdict, field

from .password import PasswordHandler, normalize_email
from ..errors import DuplicateEmailError, UserNotFoundError

logger = logging.getLogger(__name__)

# Default storage path
DEFAULT_USERS_FILE = Path(__file__).parent.parent.parent / "data" / "users.json"


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class User:
    """Public user data model (never carries the password hash)."""
    user_id: str
    name: str
    email: str  # Normalized (lower-cased) email, unique
    created_at: str = field(default_factory=utc_now)
    updated_at: str = field(default_factory=utc_now)
    last_login: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        return cls(
            user_id=data["user_id"],
            name=data.get("name", ""),
            email=data["email"],
            created_at=data.get("created_at", utc_now()),
            updated_at=data.get("updated_at", utc_now()),
            last_login=data.get("last_login")
        )


@dataclass
class UserWithSecret(User):
    """User record including the stored bcrypt hash. Login only."""
    password_hash: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "UserWithSecret":
        user = User.from_dict(data)
        return cls(**user.to_dict(), password_hash=data.get("password_hash", ""))

    def public(self) -> User:
        """Drop the hash."""
        data = self.to_dict()
        data.pop("password_hash")
        return User(**data)


class UserStore:
    """
    JSON-based user storage.

    Read-modify-write cycles are serialized with a lock.
    Users are indexed by user ID; email uniqueness is checked on every write.
    """

    def __init__(
        self,
        file_path: Optional[Path] = None,
        password_handler: Optional[PasswordHandler] = None
    ):
        """
        Initialize user store.

        Args:
            file_path: Path to users JSON file (default: data/users.json)
            password_handler: Hasher to use (default: bcrypt, 12 rounds)
        """
        self.file_path = Path(file_path) if file_path else DEFAULT_USERS_FILE
        self.password_handler = password_handler or PasswordHandler()
        self._lock = threading.Lock()
        self._ensure_file()

    def _ensure_file(self):
        """Ensure the storage file and directory exist."""
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        if not self.file_path.exists():
            self._save_all({})

    def _load_all(self) -> dict[str, dict]:
        """Load all users from file."""
        try:
            with open(self.file_path, "r") as f:
                return json.load(f)
        except FileNotFoundError:
            return {}

    def _save_all(self, users: dict[str, dict]):
        """Save all users to file."""
        with open(self.file_path, "w") as f:
            json.dump(users, f, indent=2, ensure_ascii=False)

    @staticmethod
    def _find_email(users: dict[str, dict], email: str) -> Optional[dict]:
        for data in users.values():
            if data.get("email") == email:
                return data
        return None

    def create_user(self, name: str, email: str, password: str) -> User:
        """
        Create a new user.

        Args:
            name: Display name
            email: Email address (will be normalized)
            password: Plain text password (stored as bcrypt hash)

        Returns:
            Created User object

        Raises:
            ValueError: If email or password is invalid
            DuplicateEmailError: If the email is already registered
        """
        normalized = normalize_email(email)
        if not normalized:
            raise ValueError(f"Invalid email address: {email}")

        # Hash outside the lock, it is the slow part
        password_hash = self.password_handler.hash(password)

        with self._lock:
            users = self._load_all()

            if self._find_email(users, normalized):
                raise DuplicateEmailError()

            user = UserWithSecret(
                user_id=str(uuid.uuid4()),
                name=name.strip(),
                email=normalized,
                password_hash=password_hash
            )

            users[user.user_id] = user.to_dict()
            self._save_all(users)

        logger.info(f"Created user: {normalized}")
        return user.public()

    def get_by_email_with_secret(self, email: str) -> Optional[UserWithSecret]:
        """
        Get a user and their password hash by email.

        Only the login flow should call this.
        """
        normalized = normalize_email(email)
        if not normalized:
            return None

        data = self._find_email(self._load_all(), normalized)
        if data:
            return UserWithSecret.from_dict(data)
        return None

    def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address."""
        user = self.get_by_email_with_secret(email)
        return user.public() if user else None

    def get_by_id(self, user_id: str) -> Optional[User]:
        """
        Get user by user ID.

        Args:
            user_id: User's unique ID

        Returns:
            User if found, None otherwise
        """
        data = self._load_all().get(user_id)
        if data:
            return User.from_dict(data)
        return None

    def email_exists(self, email: str, exclude_user_id: Optional[str] = None) -> bool:
        """Check whether an email belongs to any user other than exclude_user_id."""
        normalized = normalize_email(email)
        if not normalized:
            return False

        data = self._find_email(self._load_all(), normalized)
        return data is not None and data.get("user_id") != exclude_user_id

    def update_profile(
        self,
        user_id: str,
        name: Optional[str] = None,
        email: Optional[str] = None
    ) -> User:
        """
        Partially update a user's name and/or email.

        Args:
            user_id: User's unique ID
            name: New display name (unchanged if None)
            email: New email (unchanged if None, normalized otherwise)

        Returns:
            Updated User object

        Raises:
            UserNotFoundError: If user doesn't exist
            DuplicateEmailError: If another user already has the email
            ValueError: If the email is invalid
        """
        with self._lock:
            users = self._load_all()

            data = users.get(user_id)
            if data is None:
                raise UserNotFoundError()

            if email is not None:
                normalized = normalize_email(email)
                if not normalized:
                    raise ValueError(f"Invalid email address: {email}")

                owner = self._find_email(users, normalized)
                if owner and owner.get("user_id") != user_id:
                    raise DuplicateEmailError("Email already in use")
                data["email"] = normalized

            if name is not None:
                data["name"] = name.strip()

            data["updated_at"] = utc_now()
            users[user_id] = data
            self._save_all(users)

        logger.debug(f"Updated profile: {user_id}")
        return User.from_dict(data)

    def verify_password(self, email: str, password: str) -> Optional[User]:
        """
        Verify a user's password.

        Args:
            email: User's email
            password: Password to verify

        Returns:
            User if password is valid, None otherwise
        """
        user = self.get_by_email_with_secret(email)
        if not user or not user.password_hash:
            return None

        if self.password_handler.verify(password, user.password_hash):
            return user.public()
        return None

    def record_login(self, user_id: str) -> Optional[User]:
        """
        Record a user login.

        Returns:
            Updated User object or None if not found
        """
        with self._lock:
            users = self._load_all()
            data = users.get(user_id)
            if data is None:
                return None

            data["last_login"] = utc_now()
            self._save_all(users)

        return User.from_dict(data)

    def list_users(self) -> List[User]:
        """List all users."""
        return [User.from_dict(data) for data in self._load_all().values()]

    def delete_user(self, user_id: str) -> bool:
        """
        Permanently remove a user.

        Not exposed over HTTP; used by maintenance scripts and tests.

        Returns:
            True if deleted, False if not found
        """
        with self._lock:
            users = self._load_all()
            if user_id not in users:
                return False

            del users[user_id]
            self._save_all(users)

        logger.info(f"Deleted user: {user_id}")
        return True
