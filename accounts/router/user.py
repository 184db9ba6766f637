from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any, Optional

from core.database import get_db
from core.dependencies import get_optional_identity
from core.i18n import Translator, get_translator
from schemas.auth import Identity
from schemas.user import MessageResponse, UserCreate, UserPage, UserResponse
from service import user_service

router = APIRouter()

@router.post("", response_model=MessageResponse)
async def register(
    user_in: UserCreate,
    db: AsyncSession = Depends(get_db),
    t: Translator = Depends(get_translator),
):
    """회원가입 — 검증, 저장, 활성화 메일 발송까지 한 번에"""
    await user_service.register(db, user_in)
    return MessageResponse(message=t("user_created"))

@router.post("/token/{token}", response_model=MessageResponse)
async def activate(
    token: str,
    db: AsyncSession = Depends(get_db),
    t: Translator = Depends(get_translator),
):
    """메일로 받은 토큰으로 계정 활성화"""
    await user_service.activate(db, token)
    return MessageResponse(message=t("account_activation_successful"))

@router.get("", response_model=UserPage)
async def list_users(
    page: Optional[str] = None,
    size: Optional[str] = None,
    identity: Identity | None = Depends(get_optional_identity),
    db: AsyncSession = Depends(get_db),
):
    """활성 유저 목록 (로그인 상태면 본인 제외)"""
    return await user_service.list_users(db, page, size, identity)

@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: int, db: AsyncSession = Depends(get_db)):
    return await user_service.get_user(db, user_id)

@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    payload: Any = Body(None),
    identity: Identity | None = Depends(get_optional_identity),
    db: AsyncSession = Depends(get_db),
):
    """본인 사용자명 변경 — 토큰 필수 (본문 검증은 권한 확인 후 서비스에서)"""
    return await user_service.update_user(db, user_id, identity, payload)
