from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import get_db
from core.exceptions import InvalidToken
from core.security import security_schema
from schemas.auth import Identity
from service import token_service

# === FastAPI Depends()용 함수 ===

async def resolve_identity(db: AsyncSession, token: str | None) -> Identity | None:
    """
    토큰 → 사용자 식별자 (소프트 해석)

    토큰이 없거나 알 수 없으면 None. 거절 여부는 각 핸들러가 결정합니다.
    """
    if not token:
        return None
    try:
        return await token_service.verify_token(db, token)
    except InvalidToken:
        return None


async def get_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(security_schema),
) -> str | None:
    """Authorization: Bearer <token> 헤더의 토큰 문자열 (없으면 None)"""
    return credentials.credentials if credentials else None


async def get_optional_identity(
    token: str | None = Depends(get_bearer_token),
    db: AsyncSession = Depends(get_db),
) -> Identity | None:
    """인증이 선택인 라우트용 — 식별 가능하면 Identity, 아니면 None"""
    return await resolve_identity(db, token)
