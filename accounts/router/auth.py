from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import get_db
from core.dependencies import get_bearer_token
from core.i18n import Translator, get_translator
from schemas.auth import AuthResponse, Credentials
from schemas.user import MessageResponse
from service import auth_service

router = APIRouter()

@router.post("/auth", response_model=AuthResponse)
async def login(
    credentials: Credentials | None = None,
    db: AsyncSession = Depends(get_db),
):
    """이메일/비밀번호를 확인하고 세션 토큰을 발급합니다."""
    credentials = credentials or Credentials()
    return await auth_service.authenticate(db, credentials.email, credentials.password)

@router.post("/logout", response_model=MessageResponse)
async def logout(
    token: str | None = Depends(get_bearer_token),
    db: AsyncSession = Depends(get_db),
    t: Translator = Depends(get_translator),
):
    """토큰이 있으면 폐기 — 항상 200"""
    await auth_service.logout(db, token)
    return MessageResponse(message=t("logout_success"))
