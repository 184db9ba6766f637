from pydantic import EmailStr, TypeAdapter, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import AuthenticationFailure, ForbiddenAccess
from core.logger import get_logger
from core.security import verify_password
from repository import user_repo
from schemas.auth import AuthResponse
from service import token_service

logger = get_logger("auth")

_email_adapter = TypeAdapter(EmailStr)


def is_valid_email(email) -> bool:
    """이메일 형식 검사 (pydantic EmailStr 규칙, 문자열이 아니면 무효)"""
    if not isinstance(email, str) or not email:
        return False
    try:
        _email_adapter.validate_python(email)
    except ValidationError:
        return False
    return True


async def authenticate(db: AsyncSession, email, password) -> AuthResponse:
    """
    로그인 검증 비즈니스 로직

    1. 이메일 형식이 틀리면 DB 조회 없이 401
    2. 유저가 없거나 비밀번호가 틀리면 401 (어느 쪽인지 구분하지 않음)
    3. 자격 증명은 맞지만 비활성 계정이면 403
    4. 통과하면 새 토큰 발급
    """
    if not is_valid_email(email):
        raise AuthenticationFailure()

    user = await user_repo.find_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        logger.info("로그인 실패: 자격 증명 불일치")
        raise AuthenticationFailure()

    if user.inactive:
        logger.info("로그인 거부: 비활성 계정", extra={"extra_data": {"user_id": user.id}})
        raise ForbiddenAccess("inactive_auth_failure")

    token = await token_service.create_token(db, user)
    logger.info("로그인 성공", extra={"extra_data": {"user_id": user.id}})
    return AuthResponse(id=user.id, username=user.username, token=token)


async def logout(db: AsyncSession, token: str | None) -> None:
    """로그아웃 — 토큰이 있으면 폐기, 없어도 성공"""
    if token:
        await token_service.revoke_token(db, token)
        logger.info("로그아웃")
