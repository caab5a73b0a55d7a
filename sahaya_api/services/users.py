"""User registration, login and account administration."""
import logging
from datetime import datetime
from typing import Any, List, Mapping, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Session

from sahaya_api.exceptions import (
    AuthenticationError,
    AuthErrorKind,
    AuthorizationError,
    ConflictError,
    ValidationFailed,
)
from sahaya_api.models.enums import UserRole
from sahaya_api.models.user import User
from sahaya_api.security import create_access_token, hash_password, verify_password
from sahaya_api.services.entity_service import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT

logger = logging.getLogger(__name__)

USER_FILTERS = ("role", "department", "district", "is_active")
PROTECTED_FIELDS = frozenset({"id", "password_hash", "created_at", "updated_at", "last_login", "login_count"})
REQUIRED_FIELDS = frozenset({"username", "email", "first_name", "last_name", "role", "is_active", "is_verified"})
# Fields only an L1 admin may change on someone's account
ADMIN_ONLY_FIELDS = frozenset({"role", "is_active", "is_verified"})


class UserService:
    """
    Account operations.

    Invariants:
    - username and email are unique, compared lower-cased
    - passwords are only ever stored as bcrypt hashes
    - deactivation flips is_active; rows are never deleted
    """

    def __init__(self, db: Session):
        self.db = db

    def _ensure_unique(self, username: Optional[str], email: Optional[str], exclude_id: Optional[int] = None):
        clauses = []
        if username:
            clauses.append(User.username == username)
        if email:
            clauses.append(User.email == email)
        if not clauses:
            return
        query = self.db.query(User).filter(or_(*clauses))
        if exclude_id is not None:
            query = query.filter(User.id != exclude_id)
        existing = query.first()
        if existing:
            field = "username" if username and existing.username == username else "email"
            raise ConflictError(f"A user with this {field} already exists")

    def register(self, fields: Mapping[str, Any]) -> User:
        values = dict(fields)
        password = values.pop("password")
        values["username"] = values["username"].strip().lower()
        values["email"] = values["email"].strip().lower()
        self._ensure_unique(values["username"], values["email"])

        user = User(password_hash=hash_password(password), **values)
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        logger.info("User registered: %s", user.username, extra={"user_id": user.id, "role": user.role.value})
        return user

    def authenticate(self, login: str, password: str) -> User:
        """Look the user up by username or email and check the password."""
        login = login.strip().lower()
        user = self.db.query(User).filter(or_(User.username == login, User.email == login)).first()
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Failed login for %s", login, extra={"login": login})
            raise AuthenticationError(AuthErrorKind.INVALID, "Invalid username or password")
        if not user.is_active:
            logger.warning("Login refused for inactive user %s", login, extra={"user_id": user.id})
            raise AuthorizationError("Account is deactivated. Contact an administrator.")
        return user

    def login(self, login: str, password: str) -> Tuple[str, User]:
        user = self.authenticate(login, password)
        user.last_login = datetime.utcnow()
        user.login_count = (user.login_count or 0) + 1
        self.db.commit()
        self.db.refresh(user)
        token = create_access_token(user.id, user.role.value)
        logger.info("User logged in: %s", user.username, extra={"user_id": user.id})
        return token, user

    def get(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def list(self, filters: Mapping[str, Any], page: int = 1, limit: int = DEFAULT_PAGE_LIMIT) -> Tuple[List[User], int]:
        page = max(int(page or 1), 1)
        limit = min(max(int(limit or DEFAULT_PAGE_LIMIT), 1), MAX_PAGE_LIMIT)

        query = self.db.query(User)
        for name in USER_FILTERS:
            value = filters.get(name)
            if value is None or value == "":
                continue
            if name == "role":
                try:
                    value = UserRole(value)
                except ValueError:
                    raise ValidationFailed(
                        "Invalid value for role",
                        errors=[{"field": "role", "message": "must be one of: " + ", ".join(r.value for r in UserRole)}],
                    )
            elif name == "is_active" and not isinstance(value, bool):
                value = str(value).lower() in ("true", "1", "yes")
            query = query.filter(getattr(User, name) == value)

        total = query.count()
        users = query.order_by(User.created_at.desc(), User.id.desc()).offset((page - 1) * limit).limit(limit).all()
        return users, total

    def update(self, user_id: int, changes: Mapping[str, Any], allow_admin_fields: bool = False) -> Optional[User]:
        user = self.get(user_id)
        if user is None:
            return None

        values = {
            k: v for k, v in changes.items()
            if k not in PROTECTED_FIELDS and not (v is None and k in REQUIRED_FIELDS)
        }
        if not allow_admin_fields:
            blocked = ADMIN_ONLY_FIELDS.intersection(values)
            if blocked:
                raise AuthorizationError(f"Only a master admin may change: {', '.join(sorted(blocked))}")

        password = values.pop("password", None)
        if values.get("username"):
            values["username"] = values["username"].strip().lower()
        if values.get("email"):
            values["email"] = values["email"].strip().lower()
        self._ensure_unique(values.get("username"), values.get("email"), exclude_id=user.id)

        for key, value in values.items():
            if hasattr(User, key):
                setattr(user, key, value)
        if password:
            user.password_hash = hash_password(password)

        self.db.commit()
        self.db.refresh(user)
        return user

    def deactivate(self, user_id: int) -> Optional[User]:
        user = self.get(user_id)
        if user is None:
            return None
        user.is_active = False
        self.db.commit()
        self.db.refresh(user)
        logger.info("User deactivated: %s", user.username, extra={"user_id": user.id})
        return user
