import secrets
import bcrypt
from fastapi.security import HTTPBearer

from core.config import settings

# HTTPBearer: Authorization 헤더에서 "Bearer <token>" 자동 추출
# auto_error=False: 토큰이 없어도 에러를 내지 않음 (필요 여부는 각 핸들러가 판단)
security_schema = HTTPBearer(auto_error=False)


def generate_token(length: int) -> str:
    """암호학적으로 안전한 hex 문자열 생성 (length 글자)"""
    # token_hex(n)은 2n 글자를 만들므로 절반만 요청 후 자름
    return secrets.token_hex((length + 1) // 2)[:length]


def get_password_hash(password: str) -> str:
    """비밀번호 평문을 bcrypt로 해싱"""
    # bcrypt는 72바이트 초과 비밀번호를 허용하지 않음 (검증 단계에서 길이 제한 없음 → 앞 72바이트만 사용)
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    hashed_password = bcrypt.hashpw(password.encode('utf-8')[:72], salt)
    return hashed_password.decode('utf-8')


def verify_password(plain_password, hashed_password: str) -> bool:
    """입력받은 평문과 DB의 해시가 일치하는지 검증 (문자열이 아니면 불일치)"""
    if not isinstance(plain_password, str):
        return False
    try:
        return bcrypt.checkpw(
            plain_password.encode('utf-8')[:72],
            hashed_password.encode('utf-8')
        )
    except ValueError:
        return False
