from sqlalchemy import Integer, String, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from models.base import TimestampMixin
from core.database import Base

class Token(TimestampMixin, Base):
    """
    로그인 세션 토큰 테이블
    - 로그인할 때마다 하나씩 발급 (한 사용자가 여러 개 보유 가능)
    - 로그아웃 시 토큰 값으로 삭제, 만료 없음
    """
    __tablename__ = "tokens"

    token: Mapped[str] = mapped_column(
        String(32), primary_key=True
    )

    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
