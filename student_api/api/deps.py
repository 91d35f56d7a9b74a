from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from student_api.core.errors import InvalidToken
from student_api.core.security import TokenService
from student_api.db.session import get_session
from student_api.services.auth import UserAuthenticator
from student_api.services.repository import SqlStudentRepository
from student_api.services.students import StudentService

# auto_error=False so a missing header goes through our own 401 path
_bearer = HTTPBearer(auto_error=False)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_student_service(session: AsyncSession = Depends(get_session)) -> StudentService:
    return StudentService(SqlStudentRepository(session))


def get_authenticator(session: AsyncSession = Depends(get_session)) -> UserAuthenticator:
    return UserAuthenticator(session)


def current_subject(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    tokens: TokenService = Depends(get_token_service),
) -> str:
    """Subject of the bearer token on the request; 401 if absent, bad or expired."""
    if credentials is None:
        raise InvalidToken("Missing bearer token")
    return tokens.verify(credentials.credentials)
