from fastapi import FastAPI
from contextlib import asynccontextmanager
from core.database import engine
from core.exceptions import register_exception_handlers
from core.i18n import create_i18n
from core.middleware import RequestLoggingMiddleware
from router import auth, user

@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        yield
    finally:
        # DB 연결 풀 정리
        await engine.dispose()

app = FastAPI(
    title="Accounts API",
    description="회원가입 · 이메일 활성화 · 토큰 인증 · 사용자 목록/수정",
    version="0.1.0",
    lifespan=lifespan
)

# 번역 테이블 주입 (요청마다 Accept-Language로 로케일 선택)
app.state.i18n = create_i18n()

# 미들웨어 등록 (모든 요청에 request_id 부여 + 접근 로그)
app.add_middleware(RequestLoggingMiddleware)

register_exception_handlers(app)

app.include_router(user.router, prefix="/api/1.0/users", tags=["Users"])
app.include_router(auth.router, prefix="/api/1.0", tags=["Auth"])

@app.get("/health")
async def health():
    return {"status": "ok"}
