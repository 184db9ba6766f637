from datetime import datetime
from sqlalchemy import DateTime, func
from sqlalchemy.orm import Mapped, mapped_column


class TimestampMixin:
    """
    users / tokens 테이블에 공통 적용하는 생성/수정 시간

    - server_default=func.now(): DB 서버 시간 기준으로 기록
    - onupdate=func.now(): 사용자명 변경, 계정 활성화 등 UPDATE 시 자동 갱신
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
