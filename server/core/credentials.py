# server/core/credentials.py

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.errors import DuplicateResource, InvalidCredentials, NotFound, ValidationError
from core.logging_conf import get_logger
from core.security import PasswordHasher
from models.user import User


logger = get_logger(__name__)


class CredentialStore:
    """
    Registers users and checks their passwords against the stored bcrypt hash.
    """

    def __init__(self, db: Session, hasher: PasswordHasher):
        self.db = db
        self.hasher = hasher

    def _find(self, username: str) -> User | None:
        return self.db.query(User).filter(User.username == username).first()

    def register(self, username: str | None, password: str | None) -> User:
        username = (username or "").strip()
        if not username:
            raise ValidationError("Username is required")
        if not password:
            raise ValidationError("Password is required")

        if self._find(username):
            raise DuplicateResource("Username already exists")

        user = User(username=username, hashed_password=self.hasher.hash(password))
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # lost a race with a concurrent registration of the same name
            self.db.rollback()
            raise DuplicateResource("Username already exists")
        self.db.refresh(user)

        logger.info("user.registered", extra={"user_id": user.id, "username": user.username})
        return user

    def verify(self, username: str | None, password: str | None) -> User:
        """
        Unknown usernames and wrong passwords fail identically, timing included.
        """
        user = self._find(username) if username else None
        if user is None:
            self.hasher.dummy_verify()
            logger.warning("login.failed", extra={"username": username})
            raise InvalidCredentials()

        if not password or not self.hasher.verify(password, user.hashed_password):
            logger.warning("login.failed", extra={"username": username})
            raise InvalidCredentials()

        return user

    def get(self, user_id: int) -> User:
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFound("User not found")
        return user
