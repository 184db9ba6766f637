from sqlalchemy import Integer, String, Boolean
from sqlalchemy.orm import Mapped, mapped_column
from models.base import TimestampMixin
from core.database import Base


class User(TimestampMixin, Base):
    """
    사용자 모델

    - id: auto-increment — 목록 조회 시 가입 순서 그대로 정렬하는 기준
    - email: UNIQUE 제약 — 동시 가입 경쟁은 DB가 최종 판정
    - password_hash: 평문 비밀번호를 절대 저장하지 않음
    - inactive / activation_token: 활성화 전에는 inactive=True 이고 토큰이 존재,
      활성화되면 inactive=False, 토큰은 NULL
    """
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    username: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
    )

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,          # 로그인 시 이메일로 조회
        nullable=False,
    )

    # bcrypt 해시는 보통 60자, 여유있게 255로 설정
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    inactive: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )

    activation_token: Mapped[str | None] = mapped_column(
        String(32),
        index=True,
        nullable=True,
    )
