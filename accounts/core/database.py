from collections.abc import AsyncGenerator
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import DeclarativeBase
from core.config import settings

# 1. Async 엔진 생성
#    - echo: 실행되는 SQL을 콘솔에 출력 (설정으로 제어, 프로덕션에서는 False)
#    - pool_pre_ping: 끊어진 커넥션을 꺼내기 전에 확인
engine = create_async_engine(
    settings.database_url,
    echo=settings.database_echo,
    pool_pre_ping=True,
)


# 2. 세션 팩토리
#    - expire_on_commit=False: commit 후에도 객체 속성에 접근 가능
#      (True면 commit 후 속성 접근 시 LazyLoad → async에서 에러 발생)
async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False
)


# 3. Base 클래스 — 모든 모델이 상속받는 부모
#    여기서 선언하면 순환 import 방지 가능
class Base(DeclarativeBase):
    pass


# 4. DB 세션 DI (Dependency Injection)
#    FastAPI의 Depends()에서 사용
#    commit 되지 않은 변경은 close 시점에 롤백됨
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session() as session:
        try:
            yield session
        finally:
            await session.close()
