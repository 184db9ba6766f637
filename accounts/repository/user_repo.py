from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, update
from models.users import User


async def find_by_email(db: AsyncSession, email: str) -> User | None:
    """이메일로 유저 조회 (활성 여부 무관)"""
    result = await db.execute(select(User).where(User.email == email))
    return result.scalars().first()


async def activate_by_token(db: AsyncSession, token: str) -> bool:
    """
    활성화 토큰이 일치하는 비활성 유저를 조건부 UPDATE 한 번으로 활성화

    Returns:
        활성화된 행이 있으면 True (토큰이 없거나 이미 소비됐으면 False)
    """
    result = await db.execute(
        update(User)
        .where(User.activation_token == token, User.inactive == True)  # noqa: E712
        .values(inactive=False, activation_token=None)
    )
    await db.commit()
    return result.rowcount == 1


async def find_active_by_id(db: AsyncSession, user_id: int) -> User | None:
    """활성화된 유저만 조회 — 비활성 유저는 없는 것으로 취급"""
    result = await db.execute(
        select(User).where(User.id == user_id, User.inactive == False)  # noqa: E712
    )
    return result.scalars().first()


def _active_conditions(exclude_id: int | None) -> list:
    conditions = [User.inactive == False]  # noqa: E712
    if exclude_id is not None:
        conditions.append(User.id != exclude_id)
    return conditions


async def count_active(db: AsyncSession, exclude_id: int | None = None) -> int:
    """목록 대상(활성) 유저 수"""
    result = await db.execute(
        select(func.count(User.id)).where(*_active_conditions(exclude_id))
    )
    return result.scalar_one()


async def find_active_page(
    db: AsyncSession, offset: int, limit: int, exclude_id: int | None = None
) -> list[User]:
    """활성 유저 한 페이지 (가입 순서 = id 오름차순)"""
    result = await db.execute(
        select(User)
        .where(*_active_conditions(exclude_id))
        .order_by(User.id)
        .offset(offset)
        .limit(limit)
    )
    return list(result.scalars().all())


async def add(db: AsyncSession, user: User) -> User:
    """
    유저 INSERT (flush만, commit은 호출 측에서)

    회원가입은 메일 발송까지 끝나야 commit 하므로 여기서 트랜잭션을 닫지 않습니다.
    이메일 UNIQUE 위반 시 IntegrityError 발생
    """
    db.add(user)
    await db.flush()
    return user


async def save(db: AsyncSession, user: User) -> User:
    """변경사항 저장"""
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user
