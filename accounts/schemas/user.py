from pydantic import BaseModel
from typing import List, Optional


class UserCreate(BaseModel):
    """
    회원가입 요청 시 받을 데이터

    필드 규칙(길이, 형식, 중복)은 user_service.validate_registration에서
    한꺼번에 검사합니다 — 모든 필드 에러를 모아서 돌려주기 위함
    """
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class UserUpdate(BaseModel):
    """프로필 수정 — 사용자명만 변경 가능"""
    username: Optional[str] = None


class UserResponse(BaseModel):
    """공개 가능한 사용자 정보 (비밀번호 해시, 활성화 정보 제외!)"""
    id: int
    username: str
    email: str

    model_config = {
        "from_attributes": True  # SQLAlchemy 모델 객체를 Pydantic 모델로 자동 변환
    }


class UserPage(BaseModel):
    items: List[UserResponse]
    page: int
    size: int
    totalPages: int


class MessageResponse(BaseModel):
    message: str
