# dashboard/auth/providers.py

"""
Credential providers used by the sign-in action.

A provider either returns the signed-in user or raises an AuthError.
CredentialsSignin means the submitted email/password pair was rejected;
any other AuthError is a provider-side failure.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Mapping

from pydantic import BaseModel, EmailStr, Field, ValidationError
from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.security import check_password_hash, generate_password_hash

from dashboard.db.schema import users

logger = logging.getLogger(__name__)

PASSWORD_METHOD = "scrypt"


class AuthError(Exception):
    """Base class for provider failures."""


class CredentialsSignin(AuthError):
    """The submitted credentials were not accepted."""


class Credentials(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)


class User(BaseModel):
    id: str
    name: str
    email: EmailStr


def hash_password(password: str, method: str = PASSWORD_METHOD) -> str:
    return generate_password_hash(password, method=method)


def verify_password(password: str, pwhash: str) -> bool:
    # Hashes written with an unknown method never match
    try:
        return check_password_hash(pwhash, password)
    except ValueError:
        return False


class CredentialsProvider(ABC):
    @abstractmethod
    def sign_in(self, credentials: Mapping[str, Any]) -> User:
        """Return the signed-in user or raise AuthError."""


class DatabaseCredentialsProvider(CredentialsProvider):
    """Checks an email/password pair against the `users` table."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def sign_in(self, credentials: Mapping[str, Any]) -> User:
        try:
            parsed = Credentials.model_validate(dict(credentials))
        except ValidationError:
            raise CredentialsSignin("Malformed credentials")

        try:
            with self.engine.connect() as conn:
                row = conn.execute(
                    select(users.c.id, users.c.name, users.c.email, users.c.password)
                    .where(users.c.email == parsed.email)
                ).mappings().first()
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch user: {e}")
            raise AuthError("Failed to fetch user") from e

        if row is None or not verify_password(parsed.password, row["password"]):
            logger.info("Rejected sign-in for %s", parsed.email)
            raise CredentialsSignin("Invalid credentials")

        return User(id=row["id"], name=row["name"], email=row["email"])
