"""Account creation and credential checks."""
from __future__ import annotations

import re
from typing import Optional

from sqlalchemy import func, or_, select
from werkzeug.security import check_password_hash, generate_password_hash

from ..extensions import db
from .models import User

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 4
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def validate_signup(username: str, email: str, password: str) -> list[str]:
    """Return human-readable problems with a signup form; empty when valid."""

    errors: list[str] = []
    if len(username.strip()) < MIN_USERNAME_LENGTH:
        errors.append(f"Username must be at least {MIN_USERNAME_LENGTH} characters long.")
    if not EMAIL_PATTERN.match(email.strip()):
        errors.append("Please enter a valid email address.")
    if len(password) < MIN_PASSWORD_LENGTH:
        errors.append(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long.")
    return errors


def find_user(identifier: str) -> Optional[User]:
    """Look a user up by username or email, ignoring case."""

    value = identifier.strip().lower()
    if not value:
        return None
    statement = select(User).where(
        or_(func.lower(User.username) == value, func.lower(User.email) == value)
    )
    return db.session.execute(statement).scalars().first()


def get_user(user_id: int) -> Optional[User]:
    return db.session.get(User, user_id)


def create_user(username: str, email: str, password: str) -> User:
    """Register a new account, storing only a salted hash of the password."""

    errors = validate_signup(username, email, password)
    if errors:
        raise ValueError(" ".join(errors))

    username = username.strip()
    email = email.strip().lower()
    if find_user(username) or find_user(email):
        raise ValueError("That username or email is already registered.")

    user = User(
        username=username,
        email=email,
        password_hash=generate_password_hash(password),
    )
    db.session.add(user)
    db.session.commit()
    return user


def authenticate(identifier: str, password: str) -> Optional[User]:
    """Return the matching user when the password is correct."""

    user = find_user(identifier)
    if user is None or not check_password_hash(user.password_hash, password):
        return None
    return user
