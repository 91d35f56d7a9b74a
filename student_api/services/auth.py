import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from student_api.core.errors import AuthenticationFailed, StorageError
from student_api.core.passwords import verify_password
from student_api.db.models import User

logger = logging.getLogger(__name__)


class UserAuthenticator:
    """Checks a username/password pair against the ``users`` table."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def _find(self, username: str) -> User | None:
        try:
            res = await self._session.execute(select(User).where(User.username == username))
        except SQLAlchemyError as e:
            logger.error("user lookup failed: %s", e)
            raise StorageError() from e
        return res.scalar_one_or_none()

    async def authenticate(self, username: str, password: str) -> str:
        user = await self._find(username)
        if user is None or not user.enabled or not verify_password(password, user.password_hash):
            logger.info("Login rejected for %s", username)
            raise AuthenticationFailed()
        return user.username

    async def ensure_user(self, username: str, password_hash: str) -> bool:
        """Create the user if it does not exist yet. Returns True when created."""
        if await self._find(username) is not None:
            return False
        self._session.add(User(username=username, password_hash=password_hash))
        try:
            await self._session.commit()
        except SQLAlchemyError as e:
            await self._session.rollback()
            raise StorageError() from e
        return True
