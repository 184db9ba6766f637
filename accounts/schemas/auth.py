from pydantic import BaseModel
from typing import Any

class Credentials(BaseModel):
    """로그인 요청 — 타입/형식 검증은 서비스에서 (실패 시 일괄 401)"""
    email: Any = None
    password: Any = None

class AuthResponse(BaseModel):
    """로그인 성공 시 돌려줄 데이터"""
    id: int
    username: str
    token: str

class Identity(BaseModel):
    """토큰으로 식별된 호출자 — 프로필 없이 id만"""
    id: int
