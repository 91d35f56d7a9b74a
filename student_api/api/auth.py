# student_api/api/auth.py
import logging

from fastapi import APIRouter, Depends

from student_api.api.deps import get_authenticator, get_token_service
from student_api.core.security import TokenService
from student_api.schemas import LoginInput, TokenOut
from student_api.services.auth import UserAuthenticator

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=TokenOut)
async def login(
    body: LoginInput,
    authenticator: UserAuthenticator = Depends(get_authenticator),
    tokens: TokenService = Depends(get_token_service),
):
    subject = await authenticator.authenticate(body.username, body.password)
    token = tokens.issue(subject)
    logger.info("Issued token for %s", subject)
    return {"token": token}
