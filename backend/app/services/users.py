import logging
import re

from sqlmodel import Session, select

from app.auth import hash_password, verify_password
from app.errors import ConflictError, UnauthorizedError, ValidationError
from app.models.user import User

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MIN_PASSWORD_LENGTH = 8


class UserDirectory:
    def __init__(self, session: Session):
        self.session = session

    def register(self, email: str, password: str, name: str) -> User:
        email = email.strip().lower()
        if not EMAIL_PATTERN.match(email):
            raise ValidationError("Invalid email address")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )
        if not name.strip():
            raise ValidationError("Name is required")

        if self.session.exec(select(User).where(User.email == email)).first():
            raise ConflictError("Email already registered")

        user = User(email=email, password_hash=hash_password(password), name=name)
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        logger.info(f"Registered user {user.id}")
        return user

    def login(self, email: str, password: str) -> User:
        user = self.session.exec(
            select(User).where(User.email == email.strip().lower())
        ).first()
        if not user or not verify_password(password, user.password_hash):
            raise UnauthorizedError("Invalid email or password")
        return user
