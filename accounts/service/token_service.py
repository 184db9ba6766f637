from sqlalchemy.ext.asyncio import AsyncSession

from core.config import settings
from core.exceptions import InvalidToken
from core.security import generate_token
from models.token import Token
from models.users import User
from repository import token_repo
from schemas.auth import Identity


async def create_token(db: AsyncSession, user: User) -> str:
    """새 세션 토큰 발급 — 충돌은 난수 공간(16^32)에 맡김"""
    value = generate_token(settings.auth_token_length)
    await token_repo.create(db, Token(token=value, user_id=user.id))
    return value


async def verify_token(db: AsyncSession, token: str) -> Identity:
    """토큰 → 소유자 id. 없으면 InvalidToken"""
    token_in_db = await token_repo.find_by_token(db, token)
    if not token_in_db:
        raise InvalidToken()
    return Identity(id=token_in_db.user_id)


async def revoke_token(db: AsyncSession, token: str) -> None:
    """토큰 삭제 — 없는 토큰이어도 에러 아님"""
    await token_repo.delete_by_token(db, token)
