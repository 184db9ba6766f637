"""
pytest 공통 설정
"""
import sys
import os
import asyncio
import tempfile
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# 설정 로딩 전에 테스트용 환경변수 지정 (SQLite 파일 DB + 가벼운 bcrypt 비용)
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{os.path.join(tempfile.mkdtemp(), 'test.db')}")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import aiosmtplib
import pytest
from starlette.testclient import TestClient
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import NullPool

from fastapi import FastAPI
from core.database import Base, get_db
from core.config import settings
from core.exceptions import register_exception_handlers
from core.i18n import create_i18n
from core.security import get_password_hash
from models.users import User
from models.token import Token  # noqa: F401
from router import auth, user

# ===== NullPool 엔진 — 매 요청마다 새 커넥션 (테스트 전용) =====
test_engine = create_async_engine(settings.database_url, poolclass=NullPool)
test_session_factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)

async def override_get_db():
    async with test_session_factory() as session:
        try:
            yield session
        finally:
            await session.close()

# ===== 테스트 전용 앱 (미들웨어 없이) =====
test_app = FastAPI()
test_app.state.i18n = create_i18n()
register_exception_handlers(test_app)
test_app.include_router(user.router, prefix="/api/1.0/users", tags=["Users"])
test_app.include_router(auth.router, prefix="/api/1.0", tags=["Auth"])

# 핵심: get_db를 NullPool 버전으로 교체
test_app.dependency_overrides[get_db] = override_get_db

@test_app.get("/health")
async def health():
    return {"status": "ok"}


ACTIVE_USER = {"username": "user1", "email": "user1@mail.com", "password": "P4ssword", "inactive": False}


def run_db(fn):
    """테스트 코드에서 세션 하나로 비동기 DB 작업 실행"""
    async def _run():
        async with test_session_factory() as session:
            return await fn(session)
    return asyncio.run(_run())


def count_users() -> int:
    async def _count(db):
        result = await db.execute(select(func.count(User.id)))
        return result.scalar_one()
    return run_db(_count)


@pytest.fixture(autouse=True)
def reset_database():
    """테스트마다 스키마를 새로 만듦"""
    async def _reset():
        async with test_engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
    asyncio.run(_reset())
    yield


@pytest.fixture(autouse=True)
def outbox(monkeypatch):
    """SMTP 대신 메모리에 메일 쌓기"""
    sent = []

    async def fake_send(message, **kwargs):
        sent.append(message)
        return {}, "OK"

    monkeypatch.setattr(aiosmtplib, "send", fake_send)
    return sent


@pytest.fixture
def smtp_failure(monkeypatch):
    """메일 서버 장애 상황"""
    async def failing_send(message, **kwargs):
        raise aiosmtplib.SMTPServerDisconnected("Connection unexpectedly closed")

    monkeypatch.setattr(aiosmtplib, "send", failing_send)


@pytest.fixture
def client():
    """동기식 테스트 클라이언트"""
    with TestClient(test_app) as c:
        yield c


@pytest.fixture
def db_run():
    return run_db


@pytest.fixture
def user_count():
    return count_users


@pytest.fixture
def add_user():
    """DB에 직접 유저 추가 (기본: 활성 유저 user1 / P4ssword)"""
    def _add(**overrides) -> User:
        data = {**ACTIVE_USER, **overrides}

        async def _insert(db):
            db_user = User(
                username=data["username"],
                email=data["email"],
                password_hash=get_password_hash(data["password"]),
                inactive=data["inactive"],
                activation_token=data.get("activation_token"),
            )
            db.add(db_user)
            await db.commit()
            await db.refresh(db_user)
            return db_user

        return run_db(_insert)
    return _add


@pytest.fixture
def auth_headers(client, add_user):
    """인증된 헤더 — 활성 유저 생성 후 로그인해서 받은 토큰"""
    add_user()
    response = client.post("/api/1.0/auth", json={
        "email": ACTIVE_USER["email"],
        "password": ACTIVE_USER["password"],
    })
    return {"Authorization": f"Bearer {response.json()['token']}"}
