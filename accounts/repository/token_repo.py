from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from models.token import Token


async def create(db: AsyncSession, token: Token) -> Token:
    """토큰 저장"""
    db.add(token)
    await db.commit()
    return token


async def find_by_token(db: AsyncSession, token: str) -> Token | None:
    result = await db.execute(select(Token).where(Token.token == token))
    return result.scalars().first()


async def delete_by_token(db: AsyncSession, token: str) -> int:
    """토큰 삭제 — 삭제된 행 수 반환 (없으면 0)"""
    result = await db.execute(delete(Token).where(Token.token == token))
    await db.commit()
    return result.rowcount
