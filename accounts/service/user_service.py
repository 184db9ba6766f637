import math
import re
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import settings
from core.exceptions import EmailDeliveryFailure, ForbiddenAccess, InvalidToken, UserNotFound, ValidationFailure
from core.logger import get_logger
from core.security import generate_token, get_password_hash
from models.users import User
from repository import user_repo
from schemas.auth import Identity
from schemas.user import UserCreate, UserPage, UserResponse, UserUpdate
from service import email_service
from service.auth_service import is_valid_email

logger = get_logger("user")

USERNAME_MIN, USERNAME_MAX = 4, 32
PASSWORD_MIN = 6
PASSWORD_PATTERN = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d).*$")


def _username_error(username: str | None) -> str | None:
    if username is None:
        return "username_null"
    if not USERNAME_MIN <= len(username) <= USERNAME_MAX:
        return "username_size"
    return None


def _password_error(password: str | None) -> str | None:
    if password is None:
        return "password_null"
    if len(password) < PASSWORD_MIN:
        return "password_size"
    if not PASSWORD_PATTERN.match(password):
        return "password_pattern"
    return None


async def validate_registration(db: AsyncSession, user_in: UserCreate) -> dict[str, str]:
    """
    회원가입 입력 검증 — 첫 에러에서 멈추지 않고 모든 필드 에러를 모아서 반환

    Returns:
        {field: message_key} (문제 없으면 빈 dict)
    """
    errors = {}

    username_error = _username_error(user_in.username)
    if username_error:
        errors["username"] = username_error

    if user_in.email is None:
        errors["email"] = "email_null"
    elif not is_valid_email(user_in.email):
        errors["email"] = "email_invalid"
    elif await user_repo.find_by_email(db, user_in.email):
        # 동시 가입 경쟁은 여기서 못 막음 → DB UNIQUE 제약이 최종 판정
        errors["email"] = "email_inuse"

    password_error = _password_error(user_in.password)
    if password_error:
        errors["password"] = password_error

    return errors


async def register(db: AsyncSession, user_in: UserCreate) -> None:
    """
    회원가입 비즈니스 로직

    유저 INSERT와 활성화 메일 발송을 하나의 트랜잭션으로 묶습니다.
    메일 발송까지 성공해야 commit, 실패하면 유저 행까지 롤백
    """
    errors = await validate_registration(db, user_in)
    if errors:
        raise ValidationFailure(errors)

    user = User(
        username=user_in.username,
        email=user_in.email,
        password_hash=get_password_hash(user_in.password),
        inactive=True,
        activation_token=generate_token(settings.activation_token_length),
    )

    try:
        await user_repo.add(db, user)
        await email_service.send_account_activation(user.email, user.activation_token)
    except IntegrityError:
        await db.rollback()
        raise ValidationFailure({"email": "email_inuse"})
    except EmailDeliveryFailure:
        await db.rollback()
        raise

    await db.commit()
    logger.info("회원가입 완료", extra={"extra_data": {"user_id": user.id}})


async def activate(db: AsyncSession, token: str) -> None:
    """활성화 토큰 소비 — 일치하는 비활성 유저가 없으면 InvalidToken"""
    # 조회 후 수정이 아니라 조건부 UPDATE 한 번 → 같은 토큰의 동시 요청 중 하나만 성공
    activated = await user_repo.activate_by_token(db, token)
    if not activated:
        raise InvalidToken("account_activation_failure")
    logger.info("계정 활성화")


def normalize_pagination(page, size) -> tuple[int, int]:
    """
    page: 숫자가 아니거나 음수 → 0
    size: 숫자가 아니거나 0 이하, 최대치 초과 → 기본값
    """
    try:
        page = int(page)
    except (TypeError, ValueError):
        page = 0
    try:
        size = int(size)
    except (TypeError, ValueError):
        size = settings.page_size_default

    if page < 0:
        page = 0
    if size <= 0 or size > settings.page_size_max:
        size = settings.page_size_default
    return page, size


async def list_users(db: AsyncSession, page, size, identity: Identity | None = None) -> UserPage:
    """활성 유저 목록 (호출자 본인은 제외)"""
    page, size = normalize_pagination(page, size)
    exclude_id = identity.id if identity else None

    count = await user_repo.count_active(db, exclude_id)
    offset = page * size
    # 범위를 벗어난 페이지는 조회 없이 빈 목록 (거대한 OFFSET은 드라이버가 처리 못함)
    users = await user_repo.find_active_page(db, offset, size, exclude_id) if offset < count else []

    return UserPage(
        items=[UserResponse.model_validate(u) for u in users],
        page=page,
        size=size,
        totalPages=math.ceil(count / size),
    )


async def get_user(db: AsyncSession, user_id: int) -> UserResponse:
    """유저 상세 — 없거나 비활성이면 404 (두 경우를 구분하지 않음)"""
    user = await user_repo.find_active_by_id(db, user_id)
    if not user:
        raise UserNotFound()
    return UserResponse.model_validate(user)


def parse_update(payload) -> UserUpdate:
    """수정 요청 본문 → UserUpdate. 타입이 맞지 않으면 필드별 ValidationFailure"""
    try:
        return UserUpdate.model_validate(payload if payload is not None else {})
    except ValidationError as e:
        errors = {}
        for error in e.errors():
            field = ".".join(str(part) for part in error.get("loc", ())) or "body"
            errors.setdefault(field, "field_invalid")
        raise ValidationFailure(errors)


async def update_user(
    db: AsyncSession, user_id: int, identity: Identity | None, payload
) -> UserResponse:
    """
    본인만 사용자명 변경 가능

    권한 확인이 가장 먼저 — 본문 파싱이나 DB 접근은 그 다음
    """
    if identity is None or identity.id != user_id:
        raise ForbiddenAccess("unauthorized_user_update")

    user_in = parse_update(payload)

    username_error = _username_error(user_in.username)
    if username_error:
        raise ValidationFailure({"username": username_error})

    user = await user_repo.find_active_by_id(db, user_id)
    if not user:
        raise ForbiddenAccess("unauthorized_user_update")

    user.username = user_in.username
    await user_repo.save(db, user)
    logger.info("사용자명 변경", extra={"extra_data": {"user_id": user.id}})
    return UserResponse.model_validate(user)
